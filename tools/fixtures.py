#!/usr/bin/env python3
"""Write a small deterministic demo site for manual runs and the smoke runner."""
from __future__ import annotations

import base64
import io
import math
import struct
import wave
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SITE = ROOT / "site"

# Deterministic 1x1 PNG (transparent)
_PNG_1x1 = base64.b64decode(
    b"iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mP8/x8AAwMCAO6wZSYAAAAASUVORK5CYII="
)

# SOI/EOI markers only; the server never looks inside.
_JPEG_STUB = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"

_INDEX = b"""<!doctype html>
<html>
<head>
  <meta charset="utf-8">
  <title>Piano</title>
  <link rel="stylesheet" href="style.css">
</head>
<body>
  <h1>Piano</h1>
  <div id="piano"></div>
  <script src="piano.js"></script>
</body>
</html>
"""

_SCRIPT = b"""// Plays C4 on any key press.
const sample = new Audio('sounds/C4.wav');
document.addEventListener('keydown', () => {
    sample.currentTime = 0;
    sample.play();
});
"""

_STYLE = b"body { font-family: sans-serif; background: #222; color: #eee; }\n"


def c4_wav(seconds: float = 0.25, rate: int = 8000) -> bytes:
    """Return a short mono 16-bit sine tone at middle C."""
    frames = int(seconds * rate)
    samples = (
        int(12000 * math.sin(2 * math.pi * 261.63 * i / rate)) for i in range(frames)
    )
    buf = io.BytesIO()
    with wave.open(buf, "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(rate)
        w.writeframes(b"".join(struct.pack("<h", s) for s in samples))
    return buf.getvalue()


def site_files(site: Path = SITE) -> list[tuple[Path, bytes]]:
    return [
        (site / "index.html", _INDEX),
        (site / "piano.js", _SCRIPT),
        (site / "style.css", _STYLE),
        (site / "img" / "key.png", _PNG_1x1),
        (site / "img" / "photo.jpeg", _JPEG_STUB),
        (site / "sounds" / "C4.wav", c4_wav()),
        (site / "NOTES.txt", b"Keys Z..M play octave 3.\n"),
    ]


def write_site(site: Path = SITE) -> list[Path]:
    """Write the demo site under `site` and return the created paths."""
    created: list[Path] = []
    for path, data in site_files(site):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        created.append(path)
    return created


def main() -> None:
    created = write_site()
    print("Created demo site:")
    for p in created:
        print(" -", p.relative_to(ROOT))


if __name__ == "__main__":
    main()
