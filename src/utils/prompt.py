"""Context assembly and the answer prompt template."""

from typing import Iterable

from pydantic import BaseModel

import constants
from models.document import Document
from models.responses import SourceRef


def build_context(sources: Iterable[SourceRef]) -> str:
    """Render retrieved documents into one context block.

    Documents keep retrieval order and are separated by a horizontal rule.
    An empty result renders as a fixed sentence so the model can still say
    it does not know.
    """
    blocks = [
        Document.from_payload(source.payload, position).to_block()
        for position, source in enumerate(sources)
    ]
    if not blocks:
        return constants.NO_RELEVANT_DOCUMENTS
    return constants.CONTEXT_SEPARATOR.join(blocks)


class PromptTemplate(BaseModel):
    """Answer prompt with named slots.

    Attributes:
        instruction: Role of the assistant and grounding rules.
        output_constraints: Required shape of the answer.
    """

    instruction: str = constants.DEFAULT_PROMPT_INSTRUCTION
    output_constraints: str = constants.DEFAULT_PROMPT_OUTPUT_CONSTRAINTS

    def render(self, context: str, question: str) -> str:
        """Fill the template with the context block and the user question."""
        return (
            f"{self.instruction}\n\n"
            f"Context:\n{context}\n\n"
            f"User question: {question}\n\n"
            f"{self.output_constraints}"
        )
