"""Model with service configuration."""

from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    FilePath,
    PositiveFloat,
    PositiveInt,
    SecretStr,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Literal, Self

import constants


class ConfigurationBase(BaseModel):
    """Base class for all configuration models that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid")


class TLSConfiguration(ConfigurationBase):
    """TLS configuration."""

    tls_certificate_path: Optional[FilePath] = None
    tls_key_path: Optional[FilePath] = None
    tls_key_password: Optional[FilePath] = None

    @model_validator(mode="after")
    def check_tls_configuration(self) -> Self:
        """Check that certificate and key are configured together."""
        if (self.tls_certificate_path is None) != (self.tls_key_path is None):
            raise ValueError(
                "Both tls_certificate_path and tls_key_path must be set to enable TLS"
            )
        return self


class CORSConfiguration(ConfigurationBase):
    """CORS configuration."""

    allow_origins: list[str] = [
        "*"
    ]  # not AnyHttpUrl: we need to support "*" that is not valid URL
    allow_credentials: bool = False
    allow_methods: list[str] = ["*"]
    allow_headers: list[str] = ["*"]

    @model_validator(mode="after")
    def check_cors_configuration(self) -> Self:
        """Check CORS configuration."""
        # credentials are not allowed with wildcard origins per CORS/Fetch spec.
        # see https://fastapi.tiangolo.com/tutorial/cors/
        if self.allow_credentials and "*" in self.allow_origins:
            raise ValueError(
                "Invalid CORS configuration: allow_credentials can not be set to true when "
                "allow origins contains '*' wildcard."
                "Use explicit origins or disable credential."
            )
        return self


class ServiceConfiguration(ConfigurationBase):
    """Service configuration."""

    host: str = "localhost"
    port: PositiveInt = 3001
    workers: PositiveInt = 1
    color_log: bool = True
    access_log: bool = True
    tls_config: TLSConfiguration = Field(default_factory=TLSConfiguration)
    cors: CORSConfiguration = Field(default_factory=CORSConfiguration)

    @model_validator(mode="after")
    def check_service_configuration(self) -> Self:
        """Check service configuration."""
        if self.port > 65535:
            raise ValueError("Port value should be less than 65536")
        return self


class RedisConfiguration(ConfigurationBase):
    """Redis backend configuration."""

    url: str = constants.DEFAULT_REDIS_URL
    socket_timeout: PositiveFloat = constants.DEFAULT_REDIS_SOCKET_TIMEOUT
    socket_connect_timeout: PositiveFloat = constants.DEFAULT_REDIS_SOCKET_TIMEOUT

    @model_validator(mode="after")
    def check_redis_url(self) -> Self:
        """Check that the URL uses one of the schemes understood by redis-py."""
        if not self.url.startswith(("redis://", "rediss://", "unix://")):
            raise ValueError(
                f"Invalid Redis URL '{self.url}': "
                "use redis://, rediss:// or unix:// scheme"
            )
        return self


class InMemoryCacheConfig(ConfigurationBase):
    """In-memory cache configuration."""

    max_entries: PositiveInt = 10000


class CacheConfiguration(ConfigurationBase):
    """Key-value backend shared by the answer cache and session history."""

    type: Literal["redis", "memory", "noop"] = constants.CACHE_TYPE_REDIS
    redis: Optional[RedisConfiguration] = None
    memory: Optional[InMemoryCacheConfig] = None

    @model_validator(mode="after")
    def check_cache_configuration(self) -> Self:
        """Check that only the selected backend is configured."""
        match self.type:
            case constants.CACHE_TYPE_REDIS:
                if self.memory is not None:
                    raise ValueError("Only Redis cache config must be provided")
                if self.redis is None:
                    self.redis = RedisConfiguration()
            case constants.CACHE_TYPE_MEMORY:
                if self.redis is not None:
                    raise ValueError("Only memory cache config must be provided")
                if self.memory is None:
                    self.memory = InMemoryCacheConfig()
            case constants.CACHE_TYPE_NOOP:
                if any([self.redis, self.memory]):
                    raise ValueError("No-op cache does not accept backend config")
        return self


class AnswerCacheConfiguration(ConfigurationBase):
    """Query-answer cache configuration."""

    ttl: PositiveInt = constants.DEFAULT_ANSWER_CACHE_TTL


class SessionConfiguration(ConfigurationBase):
    """Session history configuration."""

    ttl: PositiveInt = constants.DEFAULT_SESSION_TTL


class EmbeddingConfiguration(ConfigurationBase):
    """Jina embeddings configuration."""

    api_key: Optional[SecretStr] = None
    url: str = constants.DEFAULT_EMBEDDING_URL
    model: str = constants.DEFAULT_EMBEDDING_MODEL
    timeout: PositiveFloat = constants.DEFAULT_EMBEDDING_TIMEOUT


class VectorIndexConfiguration(ConfigurationBase):
    """Qdrant vector index configuration."""

    url: str = constants.DEFAULT_QDRANT_URL
    api_key: Optional[SecretStr] = None
    collection: str = Field(constants.DEFAULT_COLLECTION_NAME, min_length=1)
    dimension: PositiveInt = constants.DEFAULT_EMBEDDING_DIMENSION
    timeout: PositiveInt = constants.DEFAULT_VECTOR_INDEX_TIMEOUT

    @model_validator(mode="after")
    def check_url(self) -> Self:
        """Strip trailing slashes that Qdrant rejects in the base URL."""
        self.url = self.url.rstrip("/")
        if not self.url:
            raise ValueError("Vector index URL must not be empty")
        return self


class GeneratorConfiguration(ConfigurationBase):
    """Gemini answer generator configuration."""

    api_key: Optional[SecretStr] = None
    model: str = constants.DEFAULT_GENERATOR_MODEL
    temperature: float = Field(constants.DEFAULT_GENERATOR_TEMPERATURE, ge=0, le=2)
    timeout: PositiveFloat = constants.DEFAULT_GENERATOR_TIMEOUT


class RAGConfiguration(ConfigurationBase):
    """Retrieval parameters."""

    top_k: PositiveInt = constants.DEFAULT_TOP_K


class Configuration(BaseSettings):
    """Global service configuration.

    Values come from the YAML configuration file; environment variables with
    the ``RAG_CHAT_`` prefix fill in values the file leaves out, for example
    ``RAG_CHAT_EMBEDDING__API_KEY`` or ``RAG_CHAT_CACHE__REDIS__URL``.
    """

    model_config = SettingsConfigDict(
        extra="forbid",
        env_prefix=constants.ENV_PREFIX,
        env_nested_delimiter="__",
    )

    name: str = "rag-chat"
    service: ServiceConfiguration = Field(default_factory=ServiceConfiguration)
    cache: CacheConfiguration = Field(default_factory=CacheConfiguration)
    answer_cache: AnswerCacheConfiguration = Field(
        default_factory=AnswerCacheConfiguration
    )
    sessions: SessionConfiguration = Field(default_factory=SessionConfiguration)
    embedding: EmbeddingConfiguration = Field(default_factory=EmbeddingConfiguration)
    vector_index: VectorIndexConfiguration = Field(
        default_factory=VectorIndexConfiguration
    )
    generator: GeneratorConfiguration = Field(default_factory=GeneratorConfiguration)
    rag: RAGConfiguration = Field(default_factory=RAGConfiguration)

    def dump(self, filename: str = "configuration.json") -> None:
        """Dump actual configuration into JSON file."""
        with open(filename, "w", encoding="utf-8") as fout:
            fout.write(self.model_dump_json(indent=4))

