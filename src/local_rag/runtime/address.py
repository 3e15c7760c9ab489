"""Resolution of the model-runtime address from ``OLLAMA_HOST``."""

from __future__ import annotations

import ipaddress
import logging
from typing import NamedTuple

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 11434


class RuntimeAddress(NamedTuple):
    """Host / port pair the runtime listens on."""

    host: str
    port: int

    @property
    def hostport(self) -> str:
        """``host:port`` with IPv6 hosts bracketed, as ``OLLAMA_HOST`` expects."""
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{host}:{self.port}"

    @property
    def base_url(self) -> str:
        return f"http://{self.hostport}"


def _split_host_port(value: str) -> tuple[str, int]:
    """Split ``host:port`` / ``[v6]:port``; raise ``ValueError`` when malformed."""
    if value.startswith("["):
        end = value.find("]")
        if end == -1 or value[end + 1 : end + 2] != ":":
            raise ValueError(f"missing port in address {value!r}")
        host, port_text = value[1:end], value[end + 2 :]
    else:
        host, sep, port_text = value.rpartition(":")
        if not sep:
            raise ValueError(f"missing port in address {value!r}")
        if ":" in host:
            raise ValueError(f"too many colons in address {value!r}")

    if not port_text.isdigit() or not 0 < int(port_text) < 65536:
        raise ValueError(f"invalid port in address {value!r}")
    return host, int(port_text)


def parse_runtime_address(value: str | None) -> RuntimeAddress:
    """Parse *value* (typically ``$OLLAMA_HOST``) into a :class:`RuntimeAddress`.

    Accepted forms are ``host:port``, ``[v6]:port`` and either of those
    behind an ``http://`` / ``https://`` prefix.  Anything else falls back
    to ``127.0.0.1:11434``, except a bare IP address which keeps the IP
    and uses the default port.
    """
    raw = (value or "").strip()
    for scheme in ("http://", "https://"):
        if raw.startswith(scheme):
            raw = raw[len(scheme) :].rstrip("/")
            break

    try:
        host, port = _split_host_port(raw)
    except ValueError:
        host, port = DEFAULT_HOST, DEFAULT_PORT
        try:
            host = str(ipaddress.ip_address(raw.strip("[]")))
        except ValueError:
            if raw:
                logger.warning("Unparsable runtime address %r, using %s:%d", value, host, port)
        return RuntimeAddress(host, port)

    return RuntimeAddress(host or DEFAULT_HOST, port)
