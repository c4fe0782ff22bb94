"""Configuration loader."""

import logging
from typing import Any, Optional

import yaml
from dotenv import find_dotenv, load_dotenv

from models.config import (
    AnswerCacheConfiguration,
    CacheConfiguration,
    Configuration,
    EmbeddingConfiguration,
    GeneratorConfiguration,
    RAGConfiguration,
    ServiceConfiguration,
    SessionConfiguration,
    VectorIndexConfiguration,
)

logger = logging.getLogger(__name__)


class LogicError(Exception):
    """Error in application logic."""


class AppConfig:
    """Singleton class to load and store the configuration."""

    _instance = None

    def __new__(cls, *args: Any, **kwargs: Any) -> "AppConfig":
        """Create a new instance of the class."""
        if not isinstance(cls._instance, cls):
            cls._instance = super().__new__(cls, *args, **kwargs)
        return cls._instance

    def __init__(self) -> None:
        """Initialize the class instance."""
        self._configuration: Optional[Configuration] = None

    def load_configuration(self, filename: str) -> None:
        """Load configuration from YAML file.

        Variables from a ``.env`` file in the working directory are exported
        first so that they can supply values the YAML file omits.
        """
        load_dotenv(find_dotenv(usecwd=True))
        with open(filename, encoding="utf-8") as fin:
            config_dict = yaml.safe_load(fin) or {}
            logger.info("Loaded configuration from %s", filename)
            self.init_from_dict(config_dict)

    def init_from_dict(self, config_dict: dict[Any, Any]) -> None:
        """Initialize configuration from a dictionary."""
        self._configuration = Configuration(**config_dict)

    def is_loaded(self) -> bool:
        """Whether the configuration has been loaded."""
        return self._configuration is not None

    @property
    def configuration(self) -> Configuration:
        """Return the whole configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration

    @property
    def service_configuration(self) -> ServiceConfiguration:
        """Return service configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.service

    @property
    def cache_configuration(self) -> CacheConfiguration:
        """Return cache and history backend configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.cache

    @property
    def answer_cache_configuration(self) -> AnswerCacheConfiguration:
        """Return answer cache configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.answer_cache

    @property
    def session_configuration(self) -> SessionConfiguration:
        """Return session history configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.sessions

    @property
    def embedding_configuration(self) -> EmbeddingConfiguration:
        """Return embeddings provider configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.embedding

    @property
    def vector_index_configuration(self) -> VectorIndexConfiguration:
        """Return vector index configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.vector_index

    @property
    def generator_configuration(self) -> GeneratorConfiguration:
        """Return answer generator configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.generator

    @property
    def rag_configuration(self) -> RAGConfiguration:
        """Return retrieval configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.rag


configuration: AppConfig = AppConfig()
