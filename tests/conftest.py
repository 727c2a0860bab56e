import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

BOUNDARY = "----ideaboxBoundary7MA4YWxk"


def build_multipart(parts, boundary=BOUNDARY):
    """Собрать multipart-тело из списка ``(headers, body)``."""
    chunks = []
    for headers, body in parts:
        if isinstance(body, str):
            body = body.encode("utf-8")
        head = "".join(f"{line}\r\n" for line in headers)
        chunks.append(f"--{boundary}\r\n{head}\r\n".encode("latin-1") + body + b"\r\n")
    chunks.append(f"--{boundary}--\r\n".encode("latin-1"))
    return b"".join(chunks)


def text_part(name, value):
    return ([f'Content-Disposition: form-data; name="{name}"'], value)


def file_part(name, filename, content, content_type="application/octet-stream"):
    return (
        [
            f'Content-Disposition: form-data; name="{name}"; filename="{filename}"',
            f"Content-Type: {content_type}",
        ],
        content,
    )
