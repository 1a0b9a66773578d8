"""Parser capability shared by every statement format."""

from abc import ABC, abstractmethod

from bankrec.domain.entities import ParsedTransaction
from bankrec.utils.decoding import decode_buffer


class Parser(ABC):
    """Turns the raw bytes of a statement file into parsed transactions."""

    #: Label stored on the import batch (e.g. "OFX").
    file_type: str = ""

    @abstractmethod
    def parse(self, data: bytes) -> list[ParsedTransaction]:
        """Parse a statement file.

        Rows that cannot be interpreted are skipped. Raises ValidationError
        when the file as a whole cannot be interpreted.
        """
        pass


class TextParser(Parser):
    """Parser for text formats; decodes the buffer before parsing."""

    def parse(self, data: bytes) -> list[ParsedTransaction]:
        return self.parse_text(decode_buffer(data))

    @abstractmethod
    def parse_text(self, text: str) -> list[ParsedTransaction]:
        """Parse already decoded statement text."""
        pass
