# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Response model for the upload endpoint."""

from core.responses import ApiModel


class UploadResponse(ApiModel):
    url: str
    public_id: str
    filename: str
    size: int
    type: str
