"""
Sandfly tool catalog.

Every Sandfly tool is a ToolSpec record: name, description, input
schema and an action that performs one or more client calls. The
records are plain data, built once at import time; the engine that
registers and runs them lives in tool.py and ../registry.py.

Path templates use str.format placeholders filled from the caller's
arguments. A missing argument renders as "None" and is rejected by the
Sandfly server, which is the authority on identifiers.

Resource families:
    system, hosts, credentials, scanning, results, sandflies,
    schedules, jump hosts, notifications, reports, audit
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from sandfly_fabric.tools.base import ToolAnnotations
from sandfly_fabric.tools.sandfly.alerts import get_alerts

if TYPE_CHECKING:
    from sandfly_fabric.integrations.sandfly import SandflyClient

Arguments = Mapping[str, Any]
Action = Callable[["SandflyClient", Arguments], Awaitable[Any]]


@dataclass(frozen=True)
class ToolSpec:
    """Declarative description of one tool."""

    name: str
    description: str
    input_schema: Mapping[str, Any]
    action: Action = field(repr=False)
    annotations: ToolAnnotations = field(default_factory=ToolAnnotations)


# =============================================================================
# Argument helpers
# =============================================================================


class _PathArguments(dict):
    def __missing__(self, key: str) -> None:
        return None


def _path(template: str, arguments: Arguments) -> str:
    return template.format_map(_PathArguments(arguments))


def _stringify(value: Any) -> str:
    """Render a query value the way the Sandfly API expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _limit_query(arguments: Arguments) -> dict[str, str] | None:
    limit = arguments.get("limit")
    return {"limit": _stringify(limit)} if limit else None


def _results_query(arguments: Arguments) -> dict[str, str]:
    params = {"page_size": "1000"}
    for key in ("host_id", "status"):
        if arguments.get(key):
            params[key] = _stringify(arguments[key])
    return params


def _argument(key: str) -> Callable[[Arguments], Any]:
    return lambda arguments: arguments.get(key)


def _scan_body(arguments: Arguments) -> dict[str, Any]:
    body = {
        "host_ids": arguments.get("host_ids"),
        "sandfly_names": arguments.get("sandfly_names"),
    }
    return {key: value for key, value in body.items() if value is not None}


# =============================================================================
# Action builders
# =============================================================================


def _fetch(
    template: str,
    query: Callable[[Arguments], dict[str, str] | None] | None = None,
) -> Action:
    async def action(client: SandflyClient, arguments: Arguments) -> Any:
        params = query(arguments) if query else None
        return await client.fetch(_path(template, arguments), params)

    return action


def _create(template: str, body: Callable[[Arguments], Any] | None = None) -> Action:
    async def action(client: SandflyClient, arguments: Arguments) -> Any:
        return await client.create(
            _path(template, arguments),
            body(arguments) if body else None,
        )

    return action


def _replace(template: str) -> Action:
    async def action(client: SandflyClient, arguments: Arguments) -> Any:
        return await client.replace(_path(template, arguments))

    return action


def _remove(template: str) -> Action:
    async def action(client: SandflyClient, arguments: Arguments) -> Any:
        return await client.remove(_path(template, arguments))

    return action


# =============================================================================
# Spec builders
# =============================================================================

_READ = ToolAnnotations(
    read_only_hint=True,
    destructive_hint=False,
    idempotent_hint=True,
    open_world_hint=True,
)
_WRITE = ToolAnnotations(destructive_hint=False, open_world_hint=True)
_TOGGLE = ToolAnnotations(destructive_hint=False, idempotent_hint=True, open_world_hint=True)
_DELETE = ToolAnnotations(destructive_hint=True, idempotent_hint=True, open_world_hint=True)


def _schema(properties: dict[str, Any] | None = None, required: tuple[str, ...] = ()) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object", "properties": properties or {}}
    if required:
        schema["required"] = list(required)
    return schema


def _by_id(key: str) -> dict[str, Any]:
    return _schema({key: {"type": "string"}}, (key,))


def _object(key: str) -> dict[str, Any]:
    return _schema({key: {"type": "object"}}, (key,))


def _limit() -> dict[str, Any]:
    return _schema({"limit": {"type": "number"}})


def _spec(
    name: str,
    description: str,
    action: Action,
    annotations: ToolAnnotations,
    schema: dict[str, Any] | None = None,
) -> ToolSpec:
    return ToolSpec(
        name=name,
        description=description,
        input_schema=schema if schema is not None else _schema(),
        action=action,
        annotations=annotations,
    )


# =============================================================================
# Catalog
# =============================================================================

TOOL_SPECS: tuple[ToolSpec, ...] = (
    # --- System -------------------------------------------------------------
    _spec("sandfly_get_version", "Get Sandfly server version information.",
          _fetch("/v4/system/version"), _READ),
    _spec("sandfly_get_license", "Get Sandfly license information.",
          _fetch("/v4/system/license"), _READ),
    _spec("sandfly_get_config", "Get Sandfly server configuration.",
          _fetch("/v4/system/config"), _READ),
    # --- Hosts --------------------------------------------------------------
    _spec("sandfly_list_hosts", "List all managed hosts.",
          _fetch("/v4/hosts"), _READ),
    _spec("sandfly_get_host", "Get details for a specific host.",
          _fetch("/v4/hosts/{host_id}"), _READ, _by_id("host_id")),
    _spec("sandfly_add_hosts", "Add hosts to Sandfly management.",
          _create("/v4/hosts", _argument("hosts")), _WRITE,
          _schema({"hosts": {"type": "array", "items": {"type": "object"}}}, ("hosts",))),
    _spec("sandfly_delete_host", "Remove a host from Sandfly management.",
          _remove("/v4/hosts/{host_id}"), _DELETE, _by_id("host_id")),
    _spec("sandfly_get_host_processes", "Get running processes on a host.",
          _fetch("/v4/hosts/{host_id}/processes"), _READ, _by_id("host_id")),
    _spec("sandfly_get_host_users", "Get users on a host.",
          _fetch("/v4/hosts/{host_id}/users"), _READ, _by_id("host_id")),
    _spec("sandfly_get_host_listeners", "Get network listeners on a host.",
          _fetch("/v4/hosts/{host_id}/listeners"), _READ, _by_id("host_id")),
    _spec("sandfly_get_host_services", "Get services on a host.",
          _fetch("/v4/hosts/{host_id}/services"), _READ, _by_id("host_id")),
    _spec("sandfly_get_host_scheduled_tasks", "Get scheduled tasks (cron jobs) on a host.",
          _fetch("/v4/hosts/{host_id}/scheduled_tasks"), _READ, _by_id("host_id")),
    _spec("sandfly_get_host_kernel_modules", "Get loaded kernel modules on a host.",
          _fetch("/v4/hosts/{host_id}/kernel_modules"), _READ, _by_id("host_id")),
    # --- Credentials --------------------------------------------------------
    _spec("sandfly_list_credentials", "List SSH credentials.",
          _fetch("/v4/credentials"), _READ),
    _spec("sandfly_add_credential", "Add an SSH credential.",
          _create("/v4/credentials", _argument("credential")), _WRITE, _object("credential")),
    _spec("sandfly_delete_credential", "Delete an SSH credential.",
          _remove("/v4/credentials/{credential_id}"), _DELETE, _by_id("credential_id")),
    # --- Scanning -----------------------------------------------------------
    _spec("sandfly_start_scan", "Start a scan on one or more hosts.",
          _create("/v4/scan", _scan_body), _WRITE,
          _schema(
              {
                  "host_ids": {"type": "array", "items": {"type": "string"}},
                  "sandfly_names": {"type": "array", "items": {"type": "string"}},
              },
              ("host_ids",),
          )),
    _spec("sandfly_get_scan_errors", "Get scan errors.",
          _fetch("/v4/scan/errors", _limit_query), _READ, _limit()),
    # --- Results ------------------------------------------------------------
    _spec("sandfly_get_results", "Get scan results with optional filters.",
          _fetch("/v4/results", _results_query), _READ,
          _schema({
              "host_id": {"type": "string"},
              "limit": {"type": "number"},
              "status": {"type": "string"},
          })),
    _spec("sandfly_get_alerts",
          "Get security alert counts per host. Returns per-host alert/error/pass/total "
          "counts from the hosts list (results field), plus a grand total. Use "
          'sandfly_get_results with status="alert" to fetch detailed alert records.',
          get_alerts, _READ),
    _spec("sandfly_get_result", "Get a specific scan result.",
          _fetch("/v4/results/{result_id}"), _READ, _by_id("result_id")),
    _spec("sandfly_get_host_result_summary", "Get result summary for a host.",
          _fetch("/v4/results/hosts/{host_id}/summary"), _READ, _by_id("host_id")),
    _spec("sandfly_delete_result", "Delete a scan result.",
          _remove("/v4/results/{result_id}"), _DELETE, _by_id("result_id")),
    # --- Sandflies ----------------------------------------------------------
    _spec("sandfly_list_sandflies", "List all sandfly detection scripts.",
          _fetch("/v4/sandflies"), _READ),
    _spec("sandfly_get_sandfly", "Get a specific sandfly script.",
          _fetch("/v4/sandflies/{sandfly_name}"), _READ, _by_id("sandfly_name")),
    _spec("sandfly_activate_sandfly", "Activate a sandfly detection script.",
          _replace("/v4/sandflies/{sandfly_name}/activate"), _TOGGLE, _by_id("sandfly_name")),
    _spec("sandfly_deactivate_sandfly", "Deactivate a sandfly detection script.",
          _replace("/v4/sandflies/{sandfly_name}/deactivate"), _TOGGLE, _by_id("sandfly_name")),
    # --- Schedules ----------------------------------------------------------
    _spec("sandfly_list_schedules", "List scan schedules.",
          _fetch("/v4/schedules"), _READ),
    _spec("sandfly_get_schedule", "Get a specific schedule.",
          _fetch("/v4/schedules/{schedule_id}"), _READ, _by_id("schedule_id")),
    _spec("sandfly_add_schedule", "Create a new scan schedule.",
          _create("/v4/schedules", _argument("schedule")), _WRITE, _object("schedule")),
    _spec("sandfly_run_schedule", "Immediately run a schedule.",
          _create("/v4/schedules/{schedule_id}/run"), _WRITE, _by_id("schedule_id")),
    _spec("sandfly_pause_schedule", "Pause a scan schedule.",
          _replace("/v4/schedules/{schedule_id}/pause"), _TOGGLE, _by_id("schedule_id")),
    _spec("sandfly_unpause_schedule", "Unpause a scan schedule.",
          _replace("/v4/schedules/{schedule_id}/unpause"), _TOGGLE, _by_id("schedule_id")),
    _spec("sandfly_delete_schedule", "Delete a scan schedule.",
          _remove("/v4/schedules/{schedule_id}"), _DELETE, _by_id("schedule_id")),
    # --- Jump hosts ---------------------------------------------------------
    _spec("sandfly_list_jump_hosts", "List SSH jump hosts.",
          _fetch("/v4/jump_hosts"), _READ),
    _spec("sandfly_add_jump_host", "Add an SSH jump host.",
          _create("/v4/jump_hosts", _argument("jump_host")), _WRITE, _object("jump_host")),
    _spec("sandfly_delete_jump_host", "Delete an SSH jump host.",
          _remove("/v4/jump_hosts/{jump_host_id}"), _DELETE, _by_id("jump_host_id")),
    # --- Notifications ------------------------------------------------------
    _spec("sandfly_list_notifications", "List notification configurations.",
          _fetch("/v4/notifications"), _READ),
    _spec("sandfly_add_notification", "Add a notification configuration.",
          _create("/v4/notifications", _argument("notification")), _WRITE,
          _object("notification")),
    _spec("sandfly_test_notification", "Test a notification configuration.",
          _create("/v4/notifications/{notification_id}/test"), _WRITE,
          _by_id("notification_id")),
    # --- Reports ------------------------------------------------------------
    _spec("sandfly_get_host_snapshot", "Get a full security snapshot for a host.",
          _fetch("/v4/reports/hosts/{host_id}/snapshot"), _READ, _by_id("host_id")),
    _spec("sandfly_get_scan_performance", "Get scan performance metrics.",
          _fetch("/v4/reports/performance"), _READ),
    # --- Audit --------------------------------------------------------------
    _spec("sandfly_get_audit_log", "Get the Sandfly audit log.",
          _fetch("/v4/audit", _limit_query), _READ, _limit()),
)
