"""Status command — look up a deployment and print its URLs."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.markup import escape

from openclaw_installer.client.errors import error_handler
from openclaw_installer.commands._common import (
    ApiKeyOpt,
    DeployUrlOpt,
    FormatOpt,
    check_format,
    make_client,
)
from openclaw_installer.output import presenter
from openclaw_installer.output.formatter import output
from openclaw_installer.wizard.prompts import prompt_required


@error_handler
def status(
    deployment_uid: Annotated[str, typer.Argument(help="Deployment ID")],
    api_key: ApiKeyOpt = None,
    deploy_url: DeployUrlOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Show a deployment's dashboard and runtime URLs."""
    check_format(fmt)
    api_key = api_key or prompt_required("Targon API Key", secret=True)
    with make_client(deploy_url, api_key) as client:
        data = client.get_status(deployment_uid)

    result = presenter.parse_deploy_result(data)
    if not result.deployment_uid:
        result = result.model_copy(update={"deployment_uid": deployment_uid})
    result = presenter.apply_status(result, data)

    if fmt != "table":
        output(presenter.result_record(result), fmt)
        return
    output(
        {
            "Deployment ID": result.deployment_uid,
            "Name": result.name,
            "Namespace": result.namespace,
            "Dashboard URL": result.dashboard_url,
        },
        fmt,
        title=f"Deployment: {escape(deployment_uid)}",
    )
    presenter.render_urls(result)
