"""Vulnerability parser - CVE ids, CVSS scores and npm audit reports.

Turns scanner output into SecurityVulnerability records. Malformed input is
never an error here: unparseable scores become None, unknown labels become
low severity and broken JSON yields an empty list.
"""

import json
import logging
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from idle_planner.domain.entities.snapshot import (
    SecurityVulnerability,
    VulnerabilitySeverity,
)

logger = logging.getLogger(__name__)

CVE_ID_PATTERN = re.compile(r"^CVE-(\d{4})-(\d{4,})$")
CVE_IN_TEXT_PATTERN = re.compile(r"\bCVE-\d{4}-\d{4,}\b", re.IGNORECASE)
GHSA_PATTERN = re.compile(r"GHSA(?:-[23456789cfghjmpqrvwx]{4}){3}", re.IGNORECASE)
CVSS_IN_TEXT_PATTERN = re.compile(
    r"(?:cvss(?:\s*(?:v[23](?:\.\d)?|base)?\s*score)?|score)[\"']?\s*[:=]\s*(-?\d+(?:\.\d+)?)",
    re.IGNORECASE,
)

MAX_CVSS = 10.0
SYNTHETIC_PREFIX = "NO-CVE-"

_LABELS = {
    "critical": VulnerabilitySeverity.CRITICAL,
    "high": VulnerabilitySeverity.HIGH,
    "moderate": VulnerabilitySeverity.MEDIUM,
    "medium": VulnerabilitySeverity.MEDIUM,
    "low": VulnerabilitySeverity.LOW,
    "info": VulnerabilitySeverity.LOW,
    "informational": VulnerabilitySeverity.LOW,
    "none": VulnerabilitySeverity.LOW,
}


@dataclass(frozen=True)
class ParsedCVE:
    """Components of a canonical CVE id."""

    id: str
    year: int
    sequence: str


def is_valid_cve(cve_id: str) -> bool:
    """True for canonical ids: CVE-YYYY-NNNN with four or more sequence digits."""
    return isinstance(cve_id, str) and CVE_ID_PATTERN.match(cve_id) is not None


def parse_cve(cve_id: str) -> ParsedCVE | None:
    if not isinstance(cve_id, str):
        return None
    match = CVE_ID_PATTERN.match(cve_id)
    if match is None:
        return None
    return ParsedCVE(id=cve_id, year=int(match.group(1)), sequence=match.group(2))


def extract_cves(text: str) -> list[str]:
    """CVE ids found in text, uppercased, first occurrence order, without repeats."""
    if not text:
        return []
    found = (m.group(0).upper() for m in CVE_IN_TEXT_PATTERN.finditer(text))
    return list(dict.fromkeys(found))


def _clamp_score(value: float) -> float | None:
    if math.isnan(value) or math.isinf(value) or value < 0:
        return None
    return min(value, MAX_CVSS)


def parse_cvss_score(value: Any) -> float | None:
    """Parse a CVSS base score from a number, string or score object.

    Accepted shapes: 9.8, "9.8", "CVSS: 9.8", "score: 4.2", {"score": 8.1},
    {"cvss": {"score": 6.7}}, {"cvssV3": {"baseScore": 9.1}}.
    Negative, NaN and infinite values give None. Values above 10 clamp to 10.0.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        return _clamp_score(float(value))

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return _clamp_score(float(text))
        except ValueError:
            pass
        match = CVSS_IN_TEXT_PATTERN.search(text)
        if match is None:
            return None
        return _clamp_score(float(match.group(1)))

    if isinstance(value, Mapping):
        for key in ("score", "baseScore"):
            if key in value:
                return parse_cvss_score(value[key])
        for key in ("cvss", "cvssV3", "cvssV2"):
            if isinstance(value.get(key), Mapping):
                return parse_cvss_score(value[key])
        return None

    return None


def severity_from_cvss(score: float) -> VulnerabilitySeverity:
    """Map a CVSS score: [0,4) low, [4,7) medium, [7,9) high, [9,10] critical."""
    if score >= 9.0:
        return VulnerabilitySeverity.CRITICAL
    if score >= 7.0:
        return VulnerabilitySeverity.HIGH
    if score >= 4.0:
        return VulnerabilitySeverity.MEDIUM
    return VulnerabilitySeverity.LOW


def parse_severity_label(label: Any) -> VulnerabilitySeverity:
    """Case and whitespace insensitive. Unknown labels default to low."""
    if not isinstance(label, str):
        return VulnerabilitySeverity.LOW
    return _LABELS.get(label.strip().lower(), VulnerabilitySeverity.LOW)


def synthetic_cve_id(name: str) -> str:
    """Placeholder id for findings without a CVE, e.g. NO-CVE-LEFT-PAD."""
    slug = re.sub(r"[^A-Z0-9]+", "-", name.upper()).strip("-")
    return f"{SYNTHETIC_PREFIX}{slug or 'UNKNOWN'}"


def create_vulnerability(
    partial: Mapping[str, Any] | None = None, **fields: Any
) -> SecurityVulnerability:
    """Build a vulnerability, filling a NO-CVE-<NAME> id and low severity when absent."""
    data = {**(partial or {}), **fields}
    name = str(data.get("name") or "unknown")
    cve_id = data.get("cve_id") or data.get("cveId") or synthetic_cve_id(name)
    return SecurityVulnerability(
        name=name,
        cve_id=cve_id,
        severity=parse_severity_label(data.get("severity")),
        affected_versions=str(data.get("affected_versions") or data.get("affectedVersions") or "*"),
        description=str(data.get("description") or ""),
    )


def is_valid_vulnerability(obj: Any) -> bool:
    """True when obj has a name, a cve id and one of the four severity levels."""
    if isinstance(obj, SecurityVulnerability):
        data: Mapping[str, Any] = obj.model_dump(by_alias=True, mode="json")
    elif isinstance(obj, Mapping):
        data = obj
    else:
        return False

    name = data.get("name")
    cve_id = data.get("cveId", data.get("cve_id"))
    severity = data.get("severity")
    if isinstance(severity, VulnerabilitySeverity):
        severity = severity.value
    return (
        isinstance(name, str)
        and bool(name.strip())
        and isinstance(cve_id, str)
        and bool(cve_id.strip())
        and isinstance(severity, str)
        and severity in {s.value for s in VulnerabilitySeverity}
        and isinstance(data.get("affectedVersions", data.get("affected_versions", "")), str)
        and isinstance(data.get("description", ""), str)
    )


def _advisory_ids(advisory: Mapping[str, Any]) -> list[str]:
    text = " ".join(str(advisory.get(key) or "") for key in ("title", "url", "cve", "cves"))
    cves = extract_cves(text)
    if cves:
        return cves
    ghsa = GHSA_PATTERN.search(text)
    if ghsa:
        return [ghsa.group(0)]
    return []


def _advisory_severity(advisory: Mapping[str, Any], fallback: Any) -> VulnerabilitySeverity:
    score = parse_cvss_score(advisory.get("cvss"))
    if score:
        return severity_from_cvss(score)
    return parse_severity_label(advisory.get("severity", fallback))


def parse_npm_audit_output(raw: str) -> list[SecurityVulnerability]:
    """Parse `npm audit --json` (v2 report format) into vulnerabilities.

    Each advisory in a package's `via` list becomes one vulnerability per
    CVE id. Packages that are only vulnerable through another package (all
    `via` entries are strings) become one entry with a synthetic id.
    """
    try:
        report = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning("Could not parse npm audit output: %s", e)
        return []
    if not isinstance(report, Mapping):
        logger.warning("npm audit output is not a JSON object")
        return []

    packages = report.get("vulnerabilities")
    if not isinstance(packages, Mapping):
        return []

    results: list[SecurityVulnerability] = []
    seen: set[tuple[str, str]] = set()
    for package_name, entry in sorted(packages.items()):
        if not isinstance(entry, Mapping):
            continue
        name = str(entry.get("name") or package_name)
        affected = str(entry.get("range") or "*")
        advisories = [v for v in entry.get("via") or [] if isinstance(v, Mapping)]

        if not advisories:
            advisories = [{"severity": entry.get("severity"), "title": f"Vulnerable through dependency of {name}"}]

        for advisory in advisories:
            ids = _advisory_ids(advisory) or [synthetic_cve_id(name)]
            for cve_id in ids:
                if (name, cve_id) in seen:
                    continue
                seen.add((name, cve_id))
                try:
                    results.append(
                        SecurityVulnerability(
                            name=name,
                            cve_id=cve_id,
                            severity=_advisory_severity(advisory, entry.get("severity")),
                            affected_versions=str(advisory.get("range") or affected),
                            description=str(advisory.get("title") or ""),
                        )
                    )
                except ValidationError as e:
                    logger.debug("Skipping malformed advisory for %s: %s", name, e)

    logger.debug("Parsed %d vulnerabilities from npm audit output", len(results))
    return results
