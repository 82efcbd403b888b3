"""Helix through the curl command line tool.

Fallback for interpreters built without the ssl module.
"""

import asyncio
import json
import logging

from twitchapi.transports.base import HelixTransport, QueryParams, TransportError

LOGGER = logging.getLogger(__name__)


class CurlHelixTransport(HelixTransport):
    """Runs `curl -f -L` as a subprocess, same headers as the HTTP transport"""

    name = "curl"
    executable = "curl"

    def command(self, url: str) -> list:
        return [
            self.executable,
            "-f", "-L", "--silent", "--show-error",
            "--max-time", str(self.timeout),
            "--request", "GET",
            "-H", f"Authorization: Bearer {self.oauth}",
            "-H", f"Client-ID: {self.client_id}",
            url,
        ]

    async def get(self, resource: str, params: QueryParams) -> dict:
        url = self.url_for(resource, params)
        try:
            proc = await asyncio.create_subprocess_exec(
                *self.command(url),
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await proc.communicate()
        except OSError as e:
            raise TransportError(f"{resource}: cannot run {self.executable} ({e})") from e

        if proc.returncode != 0:
            detail = stderr.decode("utf-8", "replace").strip()
            raise TransportError(f"{resource}: curl exited with {proc.returncode} {detail}".rstrip())

        try:
            return json.loads(stdout)
        except ValueError as e:
            raise TransportError(f"{resource}: invalid JSON ({e})") from e
