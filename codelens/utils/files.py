from typing import BinaryIO

MAX_UPLOAD_BYTES: int = 1024 * 1024


def decode_source(raw: bytes) -> str:
    text = raw.decode("utf-8", errors="replace")

    if text.startswith("\ufeff"):
        text = text[1:]

    return text.replace("\r\n", "\n")


def read_uploaded_source(stream: BinaryIO, max_bytes: int = MAX_UPLOAD_BYTES) -> str:
    raw: bytes = stream.read(max_bytes + 1)

    if len(raw) > max_bytes:
        raise ValueError(f"Source file exceeds {max_bytes} bytes")

    source: str = decode_source(raw)
    if not source.strip():
        raise ValueError("Source file is empty")

    return source
