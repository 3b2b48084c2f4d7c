import asyncio
import sys
from pathlib import Path
from typing import Dict, List, Optional

# Ensure the repository root is on the import path so that the modwatch
# package can be imported when tests are executed from within the tests
# directory.
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from modwatch.models import InstalledMod, RemoteVersion


class RecordingSleep:
    """Stands in for asyncio.sleep and records the requested delays."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float):
        self.delays.append(delay)
        await asyncio.sleep(0)


class FakeVersionSource:
    """
    Scripted replacement for ModrinthClient.get_project_versions.

    Each mod id maps to a list of responses consumed in order; a response is
    either a list of RemoteVersion or an exception instance to raise. The last
    response repeats once the script runs out.
    """

    def __init__(self, scripts: Optional[Dict[str, list]] = None):
        self.scripts = scripts or {}
        self.calls: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def get_project_versions(self, mod_id: str):
        self.calls.append(mod_id)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            script = self.scripts.get(mod_id, [[]])
            response = script.pop(0) if len(script) > 1 else script[0]
            if isinstance(response, BaseException):
                raise response
            return response
        finally:
            self.in_flight -= 1


def version(
    number: str,
    game_versions=("1.20.1",),
    loaders=("fabric",),
    version_id: Optional[str] = None,
    **extra,
) -> RemoteVersion:
    return RemoteVersion(
        id=version_id or f"id-{number}",
        version_number=number,
        date_published=extra.pop("date_published", "2024-01-01T00:00:00Z"),
        game_versions=list(game_versions),
        loaders=list(loaders),
        **extra,
    )


def mod(mod_id: str, current: str = "1.0.0", name: Optional[str] = None) -> InstalledMod:
    return InstalledMod(
        id=mod_id,
        name=name or mod_id.title(),
        slug=mod_id.lower(),
        version_number=current,
    )
