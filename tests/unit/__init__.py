"""Unit tests."""

from configuration import configuration  # noqa: F401

config_dict = {
    "name": "test",
    "service": {
        "host": "localhost",
        "port": 8080,
        "workers": 1,
        "color_log": True,
        "access_log": True,
    },
    "cache": {
        "type": "memory",
        "memory": {
            "max_entries": 100,
        },
    },
    "answer_cache": {
        "ttl": 600,
    },
    "sessions": {
        "ttl": 3600,
    },
    "embedding": {
        "api_key": "test-embedding-key",
    },
    "vector_index": {
        "url": "http://localhost:6333",
        "collection": "test_articles",
        "dimension": 4,
    },
    "generator": {
        "api_key": "test-generator-key",
    },
    "rag": {
        "top_k": 1,
    },
}

# NOTE: Configuration must be initialized before importing app.main, since
# the FastAPI application reads it during import time
configuration.init_from_dict(config_dict)
