"""Read deploy/status responses and print the outcome."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from rich.markup import escape

from openclaw_installer.config.models import DeployResult
from openclaw_installer.output import messages

# The deploy API is inconsistent about casing, so each logical field is
# looked up under several keys; the first non-empty value wins.
RESULT_FIELDS: dict[str, tuple[str, ...]] = {
    "deployment_uid": ("DeploymentUID", "deployment_uid"),
    "name": ("Name", "name"),
    "namespace": ("Namespace", "namespace"),
    "capacity_warning": ("CapacityWarning", "capacity_warning"),
    "error": ("Error", "error"),
}
DNS_MAPPING_KEYS = ("PortToDNSMapping", "portToDNSMapping", "port_to_dns_mapping")

_SCHEME_RE = re.compile(r"^https?://")


def first_value(data: Any, *keys: str) -> Any:
    """Return the first value under *keys* that is not None or empty."""
    if not isinstance(data, dict):
        return None
    for key in keys:
        value = data.get(key)
        if value is not None and value != "":
            return value
    return None


def first_str(data: Any, *keys: str) -> str | None:
    value = first_value(data, *keys)
    return None if value is None else str(value)


def parse_deploy_result(body: Any) -> DeployResult:
    """Extract the deploy result fields from a submit response body."""
    return DeployResult(
        **{field: first_str(body, *keys) for field, keys in RESULT_FIELDS.items()}
    )


def extract_dns_mapping(status: Any) -> dict[str, str]:
    """Return the port → hostname mapping from a status response."""
    mapping = first_value(status, *DNS_MAPPING_KEYS)
    if not isinstance(mapping, dict):
        return {}
    return {
        str(port): str(host)
        for port, host in mapping.items()
        if host is not None and str(host) != ""
    }


def normalize_url(value: str) -> str:
    return value if _SCHEME_RE.match(value) else f"https://{value}"


def normalize_urls(values: Iterable[Any]) -> list[str]:
    """Prefix bare hostnames with ``https://``, drop blanks, de-duplicate."""
    return sorted(
        {normalize_url(str(v)) for v in values if v is not None and str(v) != ""}
    )


def apply_status(result: DeployResult, status: Any) -> DeployResult:
    """Merge the runtime URLs from a status response into *result*."""
    mapping = extract_dns_mapping(status)
    return result.model_copy(
        update={"dns_mapping": mapping, "urls": normalize_urls(mapping.values())}
    )


def render_summary(result: DeployResult) -> None:
    """Print the deployment banner and identifiers."""
    console = messages.console
    console.print()
    console.print("[bold green]OpenClaw deployed successfully on Targon![/]")
    console.print()
    if result.deployment_uid:
        messages.success(f"Deployment ID : [bold]{escape(result.deployment_uid)}[/]")
    if result.name:
        messages.success(f"Name          : [bold]{escape(result.name)}[/]")
    if result.namespace:
        messages.success(f"Namespace     : [bold]{escape(result.namespace)}[/]")
    if result.dashboard_url:
        messages.success(f"Dashboard URL : [bold]{escape(result.dashboard_url)}[/]")


def render_urls(result: DeployResult) -> None:
    """Print the runtime URLs, or a not-ready note when there are none."""
    console = messages.console
    if not result.urls:
        messages.muted(
            "Deployment created, but URL is not ready yet (PortToDNSMapping empty)."
        )
        return
    console.print()
    messages.success("ClawBot URL(s):")
    for url in result.urls:
        console.print(f"  [bold]{escape(url)}[/]")


def render_footer(result: DeployResult, gateway_token: str) -> None:
    """Print the gateway token reminder and any capacity notice."""
    messages.console.print()
    messages.warn("Save your Gateway Token, you will need it to connect agents:")
    messages.console.print(f"  [bold]{escape(gateway_token)}[/]")
    if result.capacity_warning:
        messages.console.print()
        messages.warn(f"Capacity notice: {escape(result.capacity_warning)}")
    messages.console.print()
    messages.muted("It may take a minute for the gateway to become reachable.")


def result_record(result: DeployResult) -> dict[str, Any]:
    """Flat record for json/yaml/table output."""
    return {
        "deployment_uid": result.deployment_uid,
        "name": result.name,
        "namespace": result.namespace,
        "dashboard_url": result.dashboard_url,
        "urls": result.urls,
        "capacity_warning": result.capacity_warning,
    }
