"""Managed download sections in pull request descriptions.

A section is wrapped in a pair of HTML comments keyed by workflow and
artifact name, so later runs of the same workflow can find and replace
their own link without touching anything else in the description:

    <!-- download-section Build bin start -->
    [Download](https://nightly.link/o/r/actions/artifacts/7.zip)

    <!-- download-section Build bin end -->

The markers carry their surrounding newlines and must stay byte-identical
across releases, otherwise existing descriptions stop matching.
"""

NIGHTLY_LINK_BASE = "https://nightly.link"


def start_marker(workflow_name: str, artifact_name: str) -> str:
    return f"\n\n<!-- download-section {workflow_name} {artifact_name} start -->\n"


def end_marker(workflow_name: str, artifact_name: str) -> str:
    return f"\n<!-- download-section {workflow_name} {artifact_name} end -->"


def artifact_url(owner: str, repo: str, artifact_id: int) -> str:
    """nightly.link URL that serves the artifact zip without a GitHub login."""
    return f"{NIGHTLY_LINK_BASE}/{owner}/{repo}/actions/artifacts/{artifact_id}.zip"


def render_section(artifact_id: int, owner: str, repo: str, description: str) -> str:
    """Render the content placed between the markers."""
    return f"[{description}]({artifact_url(owner, repo, artifact_id)})\n"


def _locate(body: str, start: str, end: str) -> tuple[int, int] | None:
    """Return (start_idx, end_idx) of the first complete section.

    The end marker is only searched after the start marker, so a stray end
    marker earlier in the body is ignored.
    """
    start_idx = body.find(start)
    if start_idx == -1:
        return None

    end_idx = body.find(end, start_idx + len(start))
    if end_idx == -1:
        return None

    return start_idx, end_idx


def find_section(body: str | None, workflow_name: str, artifact_name: str) -> str | None:
    """Get the content of the managed section, or None if there is none."""
    body = body or ""
    start = start_marker(workflow_name, artifact_name)
    end = end_marker(workflow_name, artifact_name)

    span = _locate(body, start, end)
    if span is None:
        return None
    return body[span[0] + len(start) : span[1]]


def upsert_section(
    body: str | None,
    workflow_name: str,
    artifact_name: str,
    section_body: str,
) -> str:
    """Replace the first managed section in body, or append one.

    Text outside the section, including sections owned by other
    (workflow, artifact) pairs, is kept verbatim. Only the first matching
    section is rewritten. A start marker without an end marker after it does
    not count as a section.
    """
    body = body or ""
    start = start_marker(workflow_name, artifact_name)
    end = end_marker(workflow_name, artifact_name)
    section = start + section_body + end

    span = _locate(body, start, end)
    if span is None:
        return body + section

    start_idx, end_idx = span
    return body[:start_idx] + section + body[end_idx + len(end) :]
