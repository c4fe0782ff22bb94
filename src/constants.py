"""Constants used in business logic."""

# Key namespaces in the cache/history backend
ANSWER_CACHE_KEY_PREFIX = "cache:"
SESSION_KEY_PREFIX = "session:"

# Default lifetimes of stored values (in seconds)
DEFAULT_ANSWER_CACHE_TTL = 600
DEFAULT_SESSION_TTL = 3600

# Number of nearest neighbours retrieved for every query
DEFAULT_TOP_K = 5

# Key-value backend types
CACHE_TYPE_REDIS = "redis"
CACHE_TYPE_MEMORY = "memory"
CACHE_TYPE_NOOP = "noop"

DEFAULT_REDIS_URL = "redis://localhost:6379"
# connect/read timeouts for the cache and history backend
DEFAULT_REDIS_SOCKET_TIMEOUT = 0.5

# Jina embeddings
DEFAULT_EMBEDDING_URL = "https://api.jina.ai/v1/embeddings"
DEFAULT_EMBEDDING_MODEL = "jina-embeddings-v4"
DEFAULT_EMBEDDING_TIMEOUT = 20.0
EMBEDDING_MODE_QUERY = "query"
EMBEDDING_MODE_DOCUMENT = "document"
# Jina task names for each embedding mode
EMBEDDING_TASKS = {
    EMBEDDING_MODE_QUERY: "retrieval.query",
    EMBEDDING_MODE_DOCUMENT: "retrieval.passage",
}

# Qdrant vector index
DEFAULT_QDRANT_URL = "http://localhost:6333"
DEFAULT_COLLECTION_NAME = "news_articles"
# jina-embeddings-v4 produces 2048 dimensional vectors
DEFAULT_EMBEDDING_DIMENSION = 2048
DEFAULT_VECTOR_INDEX_TIMEOUT = 5
SIMILARITY_METRIC_COSINE = "cosine"

# Gemini answer generator
DEFAULT_GENERATOR_MODEL = "gemini-2.5-flash"
DEFAULT_GENERATOR_TEMPERATURE = 0.2
DEFAULT_GENERATOR_TIMEOUT = 30.0
GENERATOR_NOT_CONFIGURED_ANSWER = (
    "Sorry, the answer service is not available on this server."
)

# Context block assembly
NO_RELEVANT_DOCUMENTS = "No relevant articles found."
CONTEXT_SEPARATOR = "\n\n---\n\n"

# Prompt slots of the default answer template
DEFAULT_PROMPT_INSTRUCTION = """You are a news chatbot using Retrieval-Augmented Generation.
Use ONLY the context below to answer the user's question.
If the answer is not clearly in the context, say you are not sure."""

DEFAULT_PROMPT_OUTPUT_CONSTRAINTS = (
    "Answer in 3-6 concise sentences, neutral and factual."
)

# Health report values
CACHE_CONNECTED = "connected"
CACHE_NOT_CONNECTED = "not_connected"

# Number of characters of the last message shown in session summaries
SESSION_PREVIEW_LENGTH = 50

# Environment variables
ENV_PREFIX = "RAG_CHAT_"
CONFIG_PATH_ENV_VARIABLE = "RAG_CHAT_CONFIG_PATH"
