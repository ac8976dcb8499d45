"""
Wire models exchanged with the backend.

JSON keys are camelCase on the wire. Models also accept their snake_case
field names so they can be built naturally from Python code.
"""

import os
import platform
import socket
import sys
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, StrictBool
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for every payload sent to or received from the backend."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# ==============================================================================
# Shared
# ==============================================================================

class Command(WireModel):
    """Command pushed by the backend in login and heartbeat responses."""

    name: str
    params: list[Any] = []
    uuid: str = ""


class CommandResult(WireModel):
    """Result of a command, reported back in the next heartbeat."""

    output: str = ""
    status: bool = False


# ==============================================================================
# AppLogin
# ==============================================================================

def _process_id(name: str) -> int:
    # uid/gid getters do not exist on every platform
    getter = getattr(os, name, None)
    return getter() if getter else -1


class VariousInfos(WireModel):
    """Process information attached to the login request."""

    time: str = ""
    pid: int = 0
    ppid: int = 0
    euid: int = 0
    egid: int = 0
    uid: int = 0
    gid: int = 0
    name: str = ""


class AppLoginRequest(WireModel):
    """Request body for AppLogin."""

    bundle_signature: str = ""
    various_infos: VariousInfos = VariousInfos()
    agent_type: str = "python"
    agent_version: str = ""
    os_type: str = ""
    hostname: str = ""
    runtime_type: str = ""
    runtime_version: str = ""
    framework_type: str = ""
    framework_version: str = ""
    environment: str = ""

    @classmethod
    def from_runtime(
        cls,
        agent_version: str,
        *,
        framework_type: str = "",
        framework_version: str = "",
        environment: str = "",
        bundle_signature: str = "",
    ) -> "AppLoginRequest":
        """Build a login request describing the current process."""
        return cls(
            bundle_signature=bundle_signature,
            various_infos=VariousInfos(
                time=datetime.now(timezone.utc).isoformat(),
                pid=os.getpid(),
                ppid=os.getppid(),
                euid=_process_id("geteuid"),
                egid=_process_id("getegid"),
                uid=_process_id("getuid"),
                gid=_process_id("getgid"),
                name=sys.argv[0] if sys.argv else "",
            ),
            agent_version=agent_version,
            os_type=f"{platform.system()}-{platform.machine()}",
            hostname=socket.gethostname(),
            runtime_type=platform.python_implementation().lower(),
            runtime_version=platform.python_version(),
            framework_type=framework_type,
            framework_version=framework_version,
            environment=environment,
        )


class AppLoginFeatures(WireModel):
    """Agent tuning values returned at login."""

    batch_size: int = 0
    max_staleness: int = 0
    heartbeat_delay: int = 0


class AppLoginResponse(WireModel):
    """Response body for AppLogin.

    `status=false` means the credentials were rejected, whatever the HTTP status.
    """

    error: str = ""
    session_id: str = ""
    status: StrictBool = False
    commands: list[Command] = []
    features: AppLoginFeatures = AppLoginFeatures()
    pack_id: str = ""


# ==============================================================================
# AppBeat
# ==============================================================================

class MetricResponse(WireModel):
    """Aggregated metric window reported with a heartbeat."""

    name: str
    start: str = ""
    finish: str = ""
    observation: dict[str, int] = {}


class AppBeatRequest(WireModel):
    """Request body for AppBeat."""

    command_results: dict[str, CommandResult] = {}
    metrics: list[MetricResponse] = []


class AppBeatResponse(WireModel):
    """Response body for AppBeat."""

    commands: list[Command] = []
    status: StrictBool = False


# ==============================================================================
# Batch
# ==============================================================================

class BatchEvent(WireModel):
    """A single telemetry or security event."""

    event_type: str
    event: dict[str, Any] = {}


class BatchRequest(WireModel):
    """Request body for Batch. The backend only acknowledges it."""

    batch: list[BatchEvent] = []


# ==============================================================================
# ActionsPack
# ==============================================================================

class Action(WireModel):
    """Detection action to apply."""

    action_id: str
    action: str
    duration: float = 0.0
    send_response: bool = False
    parameters: dict[str, Any] = {}


class ActionsPackResponse(WireModel):
    """Response body for ActionsPack."""

    actions: list[Action] = []
    pack_id: str = ""
