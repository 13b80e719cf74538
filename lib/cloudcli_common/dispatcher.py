"""Operation dispatcher: one input item in, one API call out.

Each (resource, operation) pair maps to a handler that turns resolved
parameters into exactly one CloudCliApi call and returns the JSON payloads
to emit. Only ``environment/list`` can return more or fewer than one payload.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from .fields import resolve_parameters
from .models import AgentExecutionRequest, CreateEnvironmentRequest
from .protocol import CloudCliApi

Handler = Callable[[CloudCliApi, dict[str, Any]], Awaitable[list[dict[str, Any]]]]


async def _list(client: CloudCliApi, params: dict[str, Any]) -> list[dict[str, Any]]:
    return await client.list_environments(status=params["status"] or None)


async def _get(client: CloudCliApi, params: dict[str, Any]) -> list[dict[str, Any]]:
    return [await client.get_environment(params["environmentId"])]


async def _create(client: CloudCliApi, params: dict[str, Any]) -> list[dict[str, Any]]:
    request = CreateEnvironmentRequest(
        name=params["name"],
        subdomain=params["subdomain"],
        github_url=params["githubUrl"] or None,
        github_token=params["githubToken"] or None,
    )
    return [await client.create_environment(request)]


async def _delete(client: CloudCliApi, params: dict[str, Any]) -> list[dict[str, Any]]:
    await client.delete_environment(params["environmentId"])
    return [{"deleted": True}]


async def _start(client: CloudCliApi, params: dict[str, Any]) -> list[dict[str, Any]]:
    return [await client.start_environment(params["environmentId"])]


async def _stop(client: CloudCliApi, params: dict[str, Any]) -> list[dict[str, Any]]:
    return [await client.stop_environment(params["environmentId"])]


async def _execute_agent(
    client: CloudCliApi, params: dict[str, Any]
) -> list[dict[str, Any]]:
    options = params["additionalOptions"]
    request = AgentExecutionRequest(
        environment_id=params["agentEnvironmentId"],
        project_name=params["projectName"],
        message=params["message"],
        provider=params["provider"],
        create_branch=options.get("createBranch", False),
        create_pr=options.get("createPR", False),
        github_token=options.get("githubToken") or None,
    )
    return [await client.execute_agent(request)]


OPERATIONS: dict[tuple[str, str], Handler] = {
    ("environment", "list"): _list,
    ("environment", "get"): _get,
    ("environment", "create"): _create,
    ("environment", "delete"): _delete,
    ("environment", "start"): _start,
    ("environment", "stop"): _stop,
    ("agent", "execute"): _execute_agent,
}


async def dispatch(client: CloudCliApi, params: dict[str, Any]) -> list[dict[str, Any]]:
    """Resolve one parameter bag and issue its API call.

    Raises:
        CloudCliValidationError: bad resource, operation or parameter.
        CloudCliApiError: the API call failed.
    """
    resolved = resolve_parameters(params)
    handler = OPERATIONS[(resolved["resource"], resolved["operation"])]
    return await handler(client, resolved)
