# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Response models for the dashboard overview."""

from core.responses import ApiModel


class ClaimStats(ApiModel):
    total: int
    pending: int
    approved: int
    rejected: int


class QuoteStats(ApiModel):
    total: int
    active: int
    expired: int
    converted: int


class ReportStats(ApiModel):
    total: int
    new: int
    pending: int
    resolved: int


class ApplicationStats(ApiModel):
    total: int
    new: int
    in_review: int
    approved: int
    rejected: int


class DashboardStats(ApiModel):
    claims: ClaimStats
    quotes: QuoteStats
    reports: ReportStats
    applications: ApplicationStats
