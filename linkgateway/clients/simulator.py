from __future__ import annotations

import asyncio
import contextlib
import shlex
from typing import Protocol

import httpx

from linkgateway.core.config import Settings, SimulatorMode


class SimulatorError(RuntimeError):
    """The simulator could not be reached or reported a failure."""


class SimulatorClient(Protocol):
    mode: SimulatorMode

    async def fetch_raw(self) -> str: ...

    async def probe(self) -> bool: ...


class ProcessSimulatorClient:
    mode = SimulatorMode.PROCESS

    def __init__(self, *, command: str, probe_timeout_seconds: float) -> None:
        self._argv = [*shlex.split(command), "--json"]
        if len(self._argv) < 2:
            raise ValueError("Simulator command must not be empty")
        self._probe_timeout_seconds = probe_timeout_seconds

    @property
    def argv(self) -> list[str]:
        return list(self._argv)

    async def fetch_raw(self) -> str:
        process = await self._spawn(
            stdout=asyncio.subprocess.PIPE, stderr=asyncio.subprocess.STDOUT
        )
        try:
            output, _ = await process.communicate()
        finally:
            await _reap(process)

        if process.returncode != 0:
            raise SimulatorError(f"Simulator exited with code {process.returncode}")
        return output.decode("utf-8", errors="replace")

    async def probe(self) -> bool:
        process = await self._spawn(
            stdout=asyncio.subprocess.DEVNULL, stderr=asyncio.subprocess.DEVNULL
        )
        try:
            returncode = await asyncio.wait_for(
                process.wait(), timeout=self._probe_timeout_seconds
            )
        except asyncio.TimeoutError:
            return False
        finally:
            await _reap(process)
        return returncode == 0

    async def _spawn(self, *, stdout: int, stderr: int) -> asyncio.subprocess.Process:
        try:
            return await asyncio.create_subprocess_exec(
                *self._argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=stdout,
                stderr=stderr,
            )
        except OSError as e:
            raise SimulatorError(f"Could not start simulator '{self._argv[0]}': {e}") from e


async def _reap(process: asyncio.subprocess.Process) -> None:
    if process.returncode is not None:
        return
    with contextlib.suppress(ProcessLookupError):
        process.kill()
    await process.wait()


class HttpSimulatorClient:
    mode = SimulatorMode.HTTP

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    async def fetch_raw(self) -> str:
        resp = await self._get("/metrics")
        if resp.status_code != 200:
            raise SimulatorError(f"Simulator returned HTTP {resp.status_code}")
        return resp.text

    async def probe(self) -> bool:
        resp = await self._get("/health")
        return resp.status_code == 200

    async def _get(self, path: str) -> httpx.Response:
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout_seconds,
            headers={"Accept": "application/json"},
            transport=self._transport,
        ) as client:
            # httpx timeouts are per phase; bound the whole request as well.
            try:
                return await asyncio.wait_for(
                    client.get(path), timeout=self._timeout_seconds
                )
            except (asyncio.TimeoutError, httpx.TimeoutException) as e:
                raise SimulatorError(f"Simulator request to {path} timed out") from e
            except httpx.HTTPError as e:
                raise SimulatorError(f"Simulator request to {path} failed: {e}") from e


def create_simulator_client(settings: Settings) -> SimulatorClient:
    if settings.simulator_mode is SimulatorMode.HTTP:
        return HttpSimulatorClient(
            base_url=str(settings.simulator_url),
            timeout_seconds=settings.simulator_timeout_seconds,
        )
    return ProcessSimulatorClient(
        command=settings.simulator_command,
        probe_timeout_seconds=settings.simulator_timeout_seconds,
    )
