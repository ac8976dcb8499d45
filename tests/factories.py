"""
Random payload factories.

Each factory takes a seeded `random.Random` so failures can be replayed.
"""

import random
import string
from typing import Any

from agent_backend.models import (
    Action,
    ActionsPackResponse,
    AppBeatRequest,
    AppBeatResponse,
    AppLoginFeatures,
    AppLoginRequest,
    AppLoginResponse,
    BatchEvent,
    BatchRequest,
    Command,
    CommandResult,
    MetricResponse,
    VariousInfos,
)

ALPHABET = string.ascii_letters + string.digits + "-_ éü世"
TOKEN_ALPHABET = string.ascii_letters + string.digits + "-_."


def rand_string(rng: random.Random, min_len: int = 2, max_len: int = 50) -> str:
    return "".join(rng.choice(ALPHABET) for _ in range(rng.randint(min_len, max_len)))


def rand_token(rng: random.Random, min_len: int = 2, max_len: int = 50) -> str:
    """ASCII-only string, usable as an HTTP header value."""
    return "".join(rng.choice(TOKEN_ALPHABET) for _ in range(rng.randint(min_len, max_len)))


def rand_int(rng: random.Random) -> int:
    return rng.randint(-(2**31), 2**31 - 1)


def rand_struct(rng: random.Random, depth: int = 1) -> dict[str, Any]:
    """Free-form JSON object, one level of nesting."""
    value: dict[str, Any] = {
        "a": rand_string(rng),
        "b": rand_int(rng),
        "c": rng.uniform(-1e6, 1e6),
        "d": rng.random() < 0.5,
        "e": [rand_string(rng) for _ in range(rng.randint(0, 3))],
    }
    if depth > 0:
        value["g"] = rand_struct(rng, depth - 1)
    return value


def rand_command(rng: random.Random) -> Command:
    return Command(
        name=rand_string(rng),
        params=[rand_string(rng) for _ in range(rng.randint(0, 3))],
        uuid=rand_string(rng),
    )


def new_app_login_request(rng: random.Random) -> AppLoginRequest:
    return AppLoginRequest(
        bundle_signature=rand_string(rng),
        various_infos=VariousInfos(
            time=rand_string(rng),
            pid=rand_int(rng),
            ppid=rand_int(rng),
            euid=rand_int(rng),
            egid=rand_int(rng),
            uid=rand_int(rng),
            gid=rand_int(rng),
            name=rand_string(rng),
        ),
        agent_type=rand_string(rng),
        agent_version=rand_string(rng),
        os_type=rand_string(rng),
        hostname=rand_string(rng),
        runtime_type=rand_string(rng),
        runtime_version=rand_string(rng),
        framework_type=rand_string(rng),
        framework_version=rand_string(rng),
        environment=rand_string(rng),
    )


def new_app_login_response(rng: random.Random, status: bool = True) -> AppLoginResponse:
    return AppLoginResponse(
        error="" if status else rand_string(rng),
        session_id=rand_token(rng),
        status=status,
        commands=[rand_command(rng) for _ in range(rng.randint(0, 3))],
        features=AppLoginFeatures(
            batch_size=rng.randint(0, 1000),
            max_staleness=rng.randint(0, 1000),
            heartbeat_delay=rng.randint(0, 1000),
        ),
        pack_id=rand_string(rng),
    )


def new_app_beat_request(rng: random.Random) -> AppBeatRequest:
    return AppBeatRequest(
        command_results={
            rand_string(rng): CommandResult(output=rand_string(rng), status=rng.random() < 0.5)
            for _ in range(rng.randint(0, 3))
        },
        metrics=[
            MetricResponse(
                name=rand_string(rng),
                start=rand_string(rng),
                finish=rand_string(rng),
                observation={rand_string(rng): rng.randint(0, 10_000) for _ in range(rng.randint(0, 3))},
            )
            for _ in range(rng.randint(0, 3))
        ],
    )


def new_app_beat_response(rng: random.Random) -> AppBeatResponse:
    return AppBeatResponse(
        commands=[rand_command(rng) for _ in range(rng.randint(0, 3))],
        status=rng.random() < 0.5,
    )


def new_batch_request(rng: random.Random) -> BatchRequest:
    return BatchRequest(
        batch=[
            BatchEvent(event_type=rand_string(rng), event=rand_struct(rng))
            for _ in range(rng.randint(1, 5))
        ],
    )


def new_actions_pack_response(rng: random.Random) -> ActionsPackResponse:
    return ActionsPackResponse(
        actions=[
            Action(
                action_id=rand_string(rng),
                action=rand_string(rng),
                duration=rng.uniform(0, 3600),
                send_response=rng.random() < 0.5,
                parameters=rand_struct(rng, depth=0),
            )
            for _ in range(rng.randint(0, 4))
        ],
        pack_id=rand_string(rng),
    )
