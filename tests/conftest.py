import io
import sys
import zipfile
from pathlib import Path

import pytest
import requests

# Ensure the repo root is on sys.path so tests can import the local package.
ROOT = str(Path(__file__).resolve().parents[1])
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


class _Resp:
    def __init__(self, status_code: int = 200, content: bytes = b""):
        self.status_code = status_code
        self.content = content

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class _Sess:
    def __init__(self, routes=None):
        self.routes = routes or {}
        self.calls = []
        self.headers = {}

    def get(self, url, timeout=None, **kwargs):
        self.calls.append((url, timeout))
        if url not in self.routes:
            return _Resp(404)
        resp = self.routes[url]
        if isinstance(resp, Exception):
            raise resp
        return resp


def _make_zip(entries) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, content in entries.items():
            zf.writestr(name, content)
    return buf.getvalue()


def _make_corrupt_zip(name: str) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        zf.writestr(name, "<?php echo 'PrestaShop';\n" * 400)
        info = zf.getinfo(name)

    data = bytearray(buf.getvalue())
    # Local header is 30 bytes plus the name; writestr adds no extra field.
    start = info.header_offset + 30 + len(name.encode("utf-8"))
    for i in range(start + 2, start + min(42, info.compress_size)):
        data[i] ^= 0xFF
    return bytes(data)


FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<channels>
  <channel name="beta" available="1">
    <branch name="9.0">
      <num>9.0.0.0</num>
      <download><link>https://example.test/beta.zip</link></download>
    </branch>
  </channel>
  <channel name="stable" available="1">
    <branch name="1.6">
      <num>1.6.1.9</num>
      <download><link>https://example.test/prestashop_1.6.1.9.zip</link></download>
    </branch>
    <branch name="1.6">
      <num>1.6.1.10</num>
      <download><link>https://example.test/prestashop_1.6.1.10.zip</link></download>
    </branch>
    <branch name="1.5">
      <num>1.5.6.3</num>
      <download><link>https://example.test/prestashop_1.5.6.3.zip</link></download>
    </branch>
  </channel>
</channels>
"""


@pytest.fixture
def Resp():
    return _Resp


@pytest.fixture
def Sess():
    return _Sess


@pytest.fixture
def make_zip():
    """Build a zip archive in memory from a {name: content} mapping."""
    return _make_zip


@pytest.fixture
def make_corrupt_zip():
    """Build a deflated zip whose central directory is valid but whose payload is not."""
    return _make_corrupt_zip


@pytest.fixture(autouse=True)
def _ascii_symbols(monkeypatch: pytest.MonkeyPatch) -> None:
    # Keep console output predictable regardless of the terminal encoding.
    monkeypatch.setenv("FORCE_ASCII", "1")


@pytest.fixture
def feed_xml():
    """channel.xml body with beta and stable channels."""
    return FEED
