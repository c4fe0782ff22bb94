"""Unit tests for context assembly and the prompt template."""

import constants
from models.responses import SourceRef
from utils.prompt import PromptTemplate, build_context


def test_build_context() -> None:
    """Test that documents keep retrieval order."""
    context = build_context(
        [
            SourceRef(id=1, score=0.9, payload={"title": "Apple news", "text": "Apple released a phone"}),
            SourceRef(id=2, score=0.5, payload={"headline": "Weather", "content": "Sunny"}),
        ]
    )
    assert context == (
        "### Apple news\nApple released a phone"
        "\n\n---\n\n"
        "### Weather\nSunny"
    )


def test_build_context_without_documents() -> None:
    """Test context for empty search result."""
    assert build_context([]) == constants.NO_RELEVANT_DOCUMENTS


def test_build_context_fallbacks() -> None:
    """Test document without title and text fields."""
    context = build_context([SourceRef(id=7, score=0.1, payload={"url": "https://x"})])
    assert context.startswith("### Article 1\n")
    assert '"url": "https://x"' in context


def test_default_template() -> None:
    """Test rendering of the default template."""
    prompt = PromptTemplate().render(context="CTX", question="What?")
    assert prompt.startswith(constants.DEFAULT_PROMPT_INSTRUCTION)
    assert "Context:\nCTX\n\nUser question: What?\n\n" in prompt
    assert prompt.endswith(constants.DEFAULT_PROMPT_OUTPUT_CONSTRAINTS)


def test_custom_template() -> None:
    """Test that template slots can be replaced."""
    template = PromptTemplate(instruction="Be brief.", output_constraints="One line.")
    assert template.render(context="CTX", question="Q") == (
        "Be brief.\n\nContext:\nCTX\n\nUser question: Q\n\nOne line."
    )
