"""Portfolio roll-up: health across many campaigns, summarised per client.

Per client, alongside the health figures:
    active / queued     campaign counts (complete campaigns count as neither)
    hours_pct           retainer hours used, hourly retainers only; 0 when
                        nothing is allocated
    hours_warning       hours_pct >= 90
    hours_overage       hours_pct > 100
"""

from collections.abc import Iterable
from datetime import datetime

import pandas as pd

from campaign_health.config import settings
from campaign_health.db.models import ProjectStatus, RetainerType
from campaign_health.scoring.engine import health_label
from campaign_health.scoring.models import ClientAccount
from campaign_health.scoring.signals import SIGNAL_ORDER, round_half_up
from campaign_health.scoring.snapshot import CampaignSnapshot

HOURS_WARNING_PCT = 90
HOURS_OVERAGE_PCT = 100
NOT_ACTIVE = [ProjectStatus.QUEUED.value, ProjectStatus.COMPLETE.value]

CAMPAIGN_COLUMNS = ["company", "campaign", "status", "score", "label", *SIGNAL_ORDER]
SUMMARY_COLUMNS = [
    "company",
    "campaigns",
    "active",
    "queued",
    "mean_score",
    "min_score",
    "worst_label",
    "needs_attention",
    "hours_pct",
    "hours_warning",
    "hours_overage",
]


def retainer_usage(client: ClientAccount) -> tuple[int | None, bool, bool]:
    """Return (hours_pct, warning, overage); pct is None unless hourly."""
    if client.retainer_type != RetainerType.HOURLY:
        return None, False, False
    if client.hours_allocated <= 0:
        return 0, False, False

    pct = round_half_up(client.hours_used * 100 / client.hours_allocated)
    return pct, pct >= HOURS_WARNING_PCT, pct > HOURS_OVERAGE_PCT


def clients_of(snapshots: Iterable[CampaignSnapshot]) -> list[ClientAccount]:
    """Distinct client accounts behind a set of snapshots, in first-seen order."""
    seen: dict[str, ClientAccount] = {}
    for snap in snapshots:
        if snap.client is not None and snap.client.name not in seen:
            seen[snap.client.name] = snap.client
    return list(seen.values())


def campaign_table(snapshots: Iterable[CampaignSnapshot], now: datetime) -> pd.DataFrame:
    """One row per campaign, worst first, with each signal's score as a column."""
    rows = []
    for snap in snapshots:
        result = snap.score(now)
        row = {
            "company": snap.company_name,
            "campaign": snap.campaign.name,
            "status": snap.status.value,
            "score": result.score,
            "label": result.label.value,
        }
        row.update({s.name: s.score for s in result.signals})
        rows.append(row)

    df = pd.DataFrame(rows, columns=CAMPAIGN_COLUMNS)
    return df.sort_values(["score", "company", "campaign"], kind="stable").reset_index(drop=True)


def company_summary(
    table: pd.DataFrame, clients: Iterable[ClientAccount] = ()
) -> pd.DataFrame:
    """Aggregate a campaign table per company, lowest mean score first.

    ``needs_attention`` counts campaigns scoring below the Healthy band.
    Retainer columns come from ``clients``; companies without an account
    get no percentage and no flags.
    """
    if table.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    grouped = table.groupby("company", sort=True)
    scores = grouped["score"]
    statuses = grouped["status"]
    summary = pd.DataFrame(
        {
            "campaigns": scores.size(),
            "active": statuses.apply(lambda s: int((~s.isin(NOT_ACTIVE)).sum())),
            "queued": statuses.apply(lambda s: int((s == ProjectStatus.QUEUED.value).sum())),
            "mean_score": scores.mean().round(1),
            "min_score": scores.min(),
            "needs_attention": scores.apply(
                lambda s: int((s < settings.health_healthy_min).sum())
            ),
        }
    ).reset_index()
    summary["worst_label"] = summary["min_score"].map(lambda s: health_label(int(s)).value)

    usage = {c.name: retainer_usage(c) for c in clients}
    no_account = (None, False, False)
    summary["hours_pct"] = summary["company"].map(lambda c: usage.get(c, no_account)[0])
    summary["hours_warning"] = summary["company"].map(lambda c: usage.get(c, no_account)[1])
    summary["hours_overage"] = summary["company"].map(lambda c: usage.get(c, no_account)[2])

    return (
        summary[SUMMARY_COLUMNS]
        .sort_values(["mean_score", "company"], kind="stable")
        .reset_index(drop=True)
    )
