"""Lifecycle of the local Ollama model-serving process.

The retrieval core never talks to this module directly; the CLI starts
the runtime, waits for it to answer HTTP requests, and only then builds
the embedder and generator that issue requests against it.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from pathlib import Path
from types import TracebackType

import requests

from local_rag.exceptions import RuntimeNotReadyError
from local_rag.runtime.address import RuntimeAddress
from local_rag.runtime.keypair import initialize_keypair

logger = logging.getLogger(__name__)


class OllamaRuntime:
    """Start, probe and stop an ``ollama serve`` process.

    Parameters
    ----------
    address:
        Where the runtime listens (and where clients will connect).
    binary:
        Executable used to launch the runtime.
    keypair_dir:
        Directory for the identity keypair created before the first
        start.  ``None`` skips the bootstrap.
    probe_timeout:
        Per-request timeout of the readiness probe, in seconds.
    """

    def __init__(
        self,
        address: RuntimeAddress,
        *,
        binary: str = "ollama",
        keypair_dir: str | Path | None = None,
        probe_timeout: float = 2.0,
    ) -> None:
        self.address = address
        self.binary = binary
        self.keypair_dir = keypair_dir
        self.probe_timeout = probe_timeout
        self._process: subprocess.Popen | None = None

    @property
    def started(self) -> bool:
        """``True`` while a process launched by this object is running."""
        return self._process is not None and self._process.poll() is None

    def ready(self) -> bool:
        """Return ``True`` when the runtime answers on its base URL."""
        try:
            response = requests.get(self.address.base_url, timeout=self.probe_timeout)
        except requests.RequestException:
            return False
        return response.status_code == 200

    def start(self) -> None:
        """Launch the runtime unless something is already serving the address."""
        if self.ready():
            logger.info("Runtime already listening on %s", self.address.base_url)
            return
        if self.started:
            return

        if self.keypair_dir is not None:
            initialize_keypair(self.keypair_dir)

        env = {**os.environ, "OLLAMA_HOST": self.address.hostport}
        logger.info("Starting %s serve on %s", self.binary, self.address.hostport)
        try:
            self._process = subprocess.Popen(
                [self.binary, "serve"],
                env=env,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            raise RuntimeNotReadyError(f"Cannot launch {self.binary!r}: {exc}") from exc

    def wait_until_ready(self, timeout: float = 30.0, interval: float = 0.5) -> None:
        """Poll :meth:`ready` until it succeeds or *timeout* seconds elapse.

        Raises
        ------
        RuntimeNotReadyError
            On timeout, or as soon as the spawned process exits.
        """
        deadline = time.monotonic() + timeout
        while True:
            if self.ready():
                logger.debug("Runtime ready at %s", self.address.base_url)
                return
            if self._process is not None and self._process.poll() is not None:
                raise RuntimeNotReadyError(
                    f"{self.binary} exited with code {self._process.returncode} before becoming ready"
                )
            if time.monotonic() >= deadline:
                raise RuntimeNotReadyError(
                    f"Runtime at {self.address.base_url} not ready after {timeout:.1f}s"
                )
            time.sleep(interval)

    def stop(self, timeout: float = 10.0) -> None:
        """Terminate the process started by :meth:`start` (if any)."""
        process, self._process = self._process, None
        if process is None or process.poll() is not None:
            return
        logger.info("Stopping runtime (pid %d)", process.pid)
        process.terminate()
        try:
            process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            logger.warning("Runtime did not exit after %.1fs, killing it", timeout)
            process.kill()
            process.wait()

    def __enter__(self) -> OllamaRuntime:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()
