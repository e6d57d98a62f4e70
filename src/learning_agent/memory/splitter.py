"""Recursive character text splitter.

Splits on the coarsest separator present ("\\n\\n", then "\\n", then " ", then
characters) and merges the pieces back into chunks of at most ``chunk_size``
characters, carrying up to ``chunk_overlap`` characters between neighbours.
"""

from dataclasses import dataclass, field

DEFAULT_SEPARATORS = ["\n\n", "\n", " ", ""]


@dataclass
class RecursiveCharacterTextSplitter:
    chunk_size: int = 1000
    chunk_overlap: int = 200
    separators: list[str] = field(default_factory=lambda: list(DEFAULT_SEPARATORS))

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if self.chunk_overlap < 0 or self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be in [0, chunk_size)")

    def split_text(self, text: str) -> list[str]:
        return self._split(text, self.separators)

    def _split(self, text: str, separators: list[str]) -> list[str]:
        separator = separators[-1]
        remaining: list[str] = []
        for i, candidate in enumerate(separators):
            if candidate == "":
                separator = candidate
                break
            if candidate in text:
                separator = candidate
                remaining = separators[i + 1 :]
                break

        pieces = text.split(separator) if separator else list(text)
        pieces = [p for p in pieces if p != ""]

        chunks: list[str] = []
        short: list[str] = []
        for piece in pieces:
            if len(piece) < self.chunk_size:
                short.append(piece)
                continue

            if short:
                chunks.extend(self._merge(short, separator))
                short = []
            if remaining:
                chunks.extend(self._split(piece, remaining))
            else:
                chunks.append(piece)

        if short:
            chunks.extend(self._merge(short, separator))
        return chunks

    def _merge(self, pieces: list[str], separator: str) -> list[str]:
        sep_len = len(separator)
        chunks: list[str] = []
        current: list[str] = []
        total = 0

        for piece in pieces:
            length = len(piece)
            if total + length + (sep_len if current else 0) > self.chunk_size and current:
                chunk = separator.join(current).strip()
                if chunk:
                    chunks.append(chunk)
                # Drop from the front until the carried text fits the overlap
                while total > self.chunk_overlap or (
                    total + length + (sep_len if current else 0) > self.chunk_size and total > 0
                ):
                    total -= len(current[0]) + (sep_len if len(current) > 1 else 0)
                    current.pop(0)

            current.append(piece)
            total += length + (sep_len if len(current) > 1 else 0)

        chunk = separator.join(current).strip()
        if chunk:
            chunks.append(chunk)
        return chunks
