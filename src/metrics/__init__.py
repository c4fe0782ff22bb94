"""Metrics module for the RAG chat service."""

from prometheus_client import (
    Counter,
    Histogram,
)

# Counter to track REST API calls
# This will be used to count how many times each API endpoint is called
# and the status code of the response
rest_api_calls_total = Counter(
    "rag_rest_api_calls_total", "REST API calls counter", ["path", "status_code"]
)

# Histogram to measure response durations
# This will be used to track how long it takes to handle requests
response_duration_seconds = Histogram(
    "rag_response_duration_seconds", "Response durations", ["path"]
)

# Metric that counts how many LLM calls were made for each model
llm_calls_total = Counter("rag_llm_calls_total", "LLM calls counter", ["model"])

# Metric that counts how many LLM calls failed
llm_calls_failures_total = Counter("rag_llm_calls_failures_total", "LLM calls failures")

# Metric that counts failed calls to embeddings and vector index services
upstream_failures_total = Counter(
    "rag_upstream_failures_total", "External service call failures", ["service"]
)

# Answer cache efficiency
answer_cache_hits_total = Counter("rag_answer_cache_hits_total", "Answer cache hits")
answer_cache_misses_total = Counter(
    "rag_answer_cache_misses_total", "Answer cache misses"
)

# Cache and history operations absorbed because the backend failed
cache_degraded_operations_total = Counter(
    "rag_cache_degraded_operations_total",
    "Cache and history operations skipped because of backend errors",
    ["store", "operation"],
)
