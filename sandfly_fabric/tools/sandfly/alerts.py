"""
Cross-host alert aggregation.

The hosts list returned by GET /v4/hosts embeds per-host result
counters ({alert, error, pass, total}). sandfly_get_alerts reshapes that
list into a compact report with a grand total of alerts, which is the
only tool that does more than pass a remote response through.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from sandfly_fabric.integrations.sandfly.schemas import (
    AlertReport,
    HostAlertSummary,
    HostRecord,
)

if TYPE_CHECKING:
    from sandfly_fabric.integrations.sandfly import SandflyClient

logger = logging.getLogger(__name__)


def summarize_host_alerts(hosts: Sequence[Mapping[str, Any]]) -> dict[str, Any]:
    """
    Build the alert report for a hosts list.

    Hosts without a `results` object, or with missing counters, count
    as zero. The input sequence is left untouched.

    Returns:
        {"total_alerts": int, "hosts": [{host_id, address, hostname,
        alert, error, pass, total}, ...]}
    """
    summaries = [HostAlertSummary.from_host(HostRecord.model_validate(host)) for host in hosts]
    report = AlertReport(
        total_alerts=sum(summary.alert for summary in summaries),
        hosts=summaries,
    )
    return report.to_api_dict()


async def get_alerts(client: SandflyClient, arguments: Mapping[str, Any]) -> Any:
    """Fetch all hosts and summarize their alert counters."""
    hosts = await client.fetch("/v4/hosts")
    if not isinstance(hosts, list):
        # Unexpected shape, hand it back unchanged
        return hosts

    report = summarize_host_alerts(hosts)
    logger.info(
        f"[sandfly_get_alerts] {report['total_alerts']} alert(s) across {len(hosts)} host(s)"
    )
    return report
