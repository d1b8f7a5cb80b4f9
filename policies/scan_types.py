from typing import FrozenSet

# Unofficial scan types must be reported as "other" so that names of
# confidential custom scanners never leave the cluster.
OTHER_SCAN_TYPE: str = "other"

# Still accepted so that older operator versions keep reporting.
DEPRECATED_SCAN_TYPES: FrozenSet[str] = frozenset({
    "amass",
    "angularjs-csti-scanner",
    "cmseek",
    "doggo",
    "kubeaudit",
    "ssh-scan",
    "typo3scan",
    "whatweb",
    "zap-advanced-scan",
    "zap-api-scan",
    "zap-baseline-scan",
    "zap-full-scan",
})

OFFICIAL_SCAN_TYPES: FrozenSet[str] = frozenset({
    "ffuf",
    "git-repo-scanner",
    "gitleaks",
    "kube-hunter",
    "ncrack",
    "nikto",
    "nmap",
    "nuclei",
    "screenshooter",
    "semgrep",
    "ssh-audit",
    "sslyze",
    "trivy",
    "trivy-filesystem",
    "trivy-image",
    "trivy-repo",
    "trivy-sbom-image",
    "wpscan",
    "zap-automation-scan",
    OTHER_SCAN_TYPE,
}) | DEPRECATED_SCAN_TYPES
