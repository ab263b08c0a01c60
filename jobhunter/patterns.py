"""Pattern and keyword tables used by the classifier, scorer and analyzer.

Every table is ordered. Where several entries can match the same text the
first one wins, so reordering changes results.
"""
from __future__ import annotations

import re

# (regex, canonical tag). Several patterns may share a tag; the tag is
# reported once.
SKILL_PATTERNS: list[tuple[str, str]] = [
    (r"\baws\b", "AWS"),
    (r"amazon web services", "AWS"),
    (r"\bazure\b", "Azure"),
    (r"microsoft azure", "Azure"),
    (r"\bgcp\b", "GCP"),
    (r"google cloud", "GCP"),
    (r"\bpython\b", "Python"),
    (r"\bgo\b", "Go"),
    (r"\bgolang\b", "Go"),
    (r"\bjava\b", "Java"),
    (r"javascript", "JavaScript"),
    (r"node\.?js", "Node.js"),
    (r"\breact\b", "React"),
    (r"docker", "Docker"),
    (r"kubernetes", "Kubernetes"),
    (r"\bk8s\b", "Kubernetes"),
    (r"terraform", "Terraform"),
    (r"ansible", "Ansible"),
    (r"fortinet", "Fortinet"),
    (r"palo alto", "Palo Alto"),
    (r"\bcisco\b", "Cisco"),
    (r"\bsiem\b", "SIEM"),
    (r"splunk", "Splunk"),
    (r"qradar", "QRadar"),
    (r"arcsight", "ArcSight"),
    (r"cybersecurity", "Cybersecurity"),
    (r"cyber security", "Cybersecurity"),
    (r"cloud security", "Cloud Security"),
    (r"network security", "Network Security"),
    (r"\bsoc\b", "SOC"),
    (r"security operations cent(?:er|re)", "SOC"),
    (r"incident response", "Incident Response"),
    (r"threat intelligence", "Threat Intelligence"),
    (r"vulnerability management", "Vulnerability Management"),
    (r"penetration testing", "Penetration Testing"),
    (r"pen testing", "Penetration Testing"),
    (r"firewall", "Firewall"),
    (r"\bvpn\b", "VPN"),
    (r"\bids\b", "IDS"),
    (r"\bips\b", "IPS"),
    (r"\blinux\b", "Linux"),
    (r"\bwindows\b", "Windows"),
    (r"active directory", "Active Directory"),
]

TECH_STACK_PATTERNS: list[tuple[str, str]] = [
    (r"\baws\b", "AWS"),
    (r"\bec2\b", "EC2"),
    (r"\bs3\b", "S3"),
    (r"\blambda\b", "Lambda"),
    (r"cloudformation", "CloudFormation"),
    (r"\bazure ad\b", "Azure AD"),
    (r"azure security center", "Azure Security Center"),
    (r"\bazure\b", "Azure"),
    (r"docker", "Docker"),
    (r"kubernetes", "Kubernetes"),
    (r"\bcontainers?\b", "Containers"),
    (r"terraform", "Terraform"),
    (r"ansible", "Ansible"),
    (r"\bchef\b", "Chef"),
    (r"\bpuppet\b", "Puppet"),
    (r"jenkins", "Jenkins"),
    (r"gitlab", "GitLab"),
    (r"github actions", "GitHub Actions"),
    (r"\blinux\b", "Linux"),
    (r"ubuntu", "Ubuntu"),
    (r"centos", "CentOS"),
    (r"red ?hat", "Red Hat"),
    (r"windows server", "Windows Server"),
    (r"active directory", "Active Directory"),
    (r"mysql", "MySQL"),
    (r"postgres(?:ql)?", "PostgreSQL"),
    (r"mongodb", "MongoDB"),
    (r"\bredis\b", "Redis"),
    (r"elasticsearch", "Elasticsearch"),
    (r"kibana", "Kibana"),
    (r"logstash", "Logstash"),
]

_AMOUNT = r"[\d,]+\.?\d*"
_RANGE_SEP = r"\s*[-–]\s*"

# Applied to lower-cased text; the first match is title-cased and returned.
SALARY_PATTERNS: list[str] = [
    rf"ksh\.?\s*{_AMOUNT}{_RANGE_SEP}ksh\.?\s*{_AMOUNT}",
    rf"ksh\.?\s*{_AMOUNT}{_RANGE_SEP}{_AMOUNT}\s*ksh",
    rf"salary\s*:?\s*ksh\.?\s*{_AMOUNT}{_RANGE_SEP}ksh\.?\s*{_AMOUNT}",
    rf"ksh\.?\s*{_AMOUNT}{_RANGE_SEP}{_AMOUNT}",
    rf"ksh\.?\s*{_AMOUNT}\s*per\s*month",
    rf"ksh\.?\s*{_AMOUNT}\s*pm\b",
    rf"{_AMOUNT}{_RANGE_SEP}{_AMOUNT}\s*ksh",
    rf"\bkes\s*{_AMOUNT}(?:{_RANGE_SEP}(?:kes\s*)?{_AMOUNT})?",
    rf"(?:usd|\$)\s*{_AMOUNT}(?:{_RANGE_SEP}(?:usd|\$)?\s*{_AMOUNT})?",
    r"\b(?:competitive|attractive|market[- ]related)\s+(?:salary|remuneration|pay)(?:\s+in\s+(?:ksh|kes|usd))?",
]

# (regex, label). "{years}" in a label is replaced by the first capture group.
EXPERIENCE_PATTERNS: list[tuple[str, str]] = [
    (r"\bmid[\s-]*level\b|\bintermediate\b", "Mid Level"),
    (r"\b(?:senior|lead|principal|head\s+of)\b", "Senior Level"),
    (r"\b(?:junior|associate|entry[\s-]*level)\b", "Junior Level"),
    (r"\b(?:intern|internship|trainee)\b", "Internship"),
    (r"\b(?:executive|director|vice\s+president|vp)\b", "Executive Level"),
    (r"(\d+)\+?\s*(?:years?|yrs?)\b", "{years} years experience"),
]

NEGOTIABLE = "Negotiable"
NOT_SPECIFIED = "Not specified"

# Scorer buckets, checked top to bottom against title + description.
SENIORITY_BUCKETS: list[tuple[tuple[str, ...], int]] = [
    (("5 years", "senior", "lead"), 20),
    (("3 years", "mid-level", "mid level", "intermediate"), 15),
    (("1 year", "junior", "entry"), 10),
]
SENIORITY_FALLBACK_POINTS = 5

COMPENSATION_KEYWORDS: tuple[str, ...] = ("ksh", "salary", "compensation")

KNOWN_EMPLOYERS: tuple[str, ...] = (
    "safaricom", "kcb", "equity", "google", "microsoft", "amazon", "oracle", "ibm",
)

# Skills-gap analysis: lower-case keywords searched as plain substrings.
REQUIRED_SKILL_KEYWORDS: list[str] = [
    "aws", "azure", "gcp", "cloud", "python", "go", "golang", "java", "javascript",
    "docker", "kubernetes", "terraform", "ansible", "jenkins", "git",
    "fortinet", "palo alto", "cisco", "check point", "siem", "splunk",
    "qradar", "arcsight", "wireshark", "metasploit", "nessus", "nexpose",
    "burp suite", "nmap", "security+", "ceh", "cissp", "oscp", "gsoc",
    "firewall", "vpn", "ids", "ips", "dlp", "soc", "incident response",
    "threat intelligence", "vulnerability management", "penetration testing",
    "risk assessment", "compliance", "iso 27001", "nist", "pci dss",
    "linux", "windows", "active directory", "network security",
]

TRANSFERABLE_SKILLS: dict[str, str] = {
    "Splunk": "FortiAnalyzer log analysis experience",
    "Python": "Go programming experience for automation",
    "Azure": "AWS cloud security knowledge",
    "Palo Alto": "Fortinet firewall administration",
    "Qradar": "SIEM monitoring experience",
    "Nessus": "Vulnerability assessment background",
    "Metasploit": "Penetration testing fundamentals",
}


def compile_table(table: list[tuple[str, str]]) -> list[tuple[re.Pattern[str], str]]:
    return [(re.compile(pattern, re.IGNORECASE), label) for pattern, label in table]
