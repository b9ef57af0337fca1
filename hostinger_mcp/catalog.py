 # catalog.py
 # - ToolName: closed set of tool identifiers
 # - Catalog: ordered, read-only registry of ToolDef (tools/list source)

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional

from hostinger_mcp.schemas.mcp import ToolDef, ToolInputSchema


class ToolName(str, Enum):
    # VPS
    LIST_VPS = "list_vps"
    GET_VPS = "get_vps"
    START_VPS = "start_vps"
    STOP_VPS = "stop_vps"
    RESTART_VPS = "restart_vps"
    GET_VPS_USAGE = "get_vps_usage"
    # Domains / DNS
    LIST_DOMAINS = "list_domains"
    GET_DOMAIN = "get_domain"
    GET_DOMAIN_DNS = "get_domain_dns"
    CREATE_DNS_RECORD = "create_dns_record"
    UPDATE_DNS_RECORD = "update_dns_record"
    DELETE_DNS_RECORD = "delete_dns_record"
    # Hosting
    LIST_HOSTING_ACCOUNTS = "list_hosting_accounts"
    GET_HOSTING_ACCOUNT = "get_hosting_account"
    GET_HOSTING_USAGE = "get_hosting_usage"
    # Email
    LIST_EMAIL_ACCOUNTS = "list_email_accounts"
    CREATE_EMAIL_ACCOUNT = "create_email_account"
    DELETE_EMAIL_ACCOUNT = "delete_email_account"
    # SSL
    LIST_SSL_CERTIFICATES = "list_ssl_certificates"
    GET_SSL_CERTIFICATE = "get_ssl_certificate"
    CREATE_SSL_CERTIFICATE = "create_ssl_certificate"
    # Backups
    LIST_BACKUPS = "list_backups"
    CREATE_BACKUP = "create_backup"
    RESTORE_BACKUP = "restore_backup"
    # Account
    GET_ACCOUNT_INFO = "get_account_info"
    GET_INVOICES = "get_invoices"

    @classmethod
    def parse(cls, name: Any) -> Optional["ToolName"]:
        """Map a client-supplied string to a known tool, or None."""
        if not isinstance(name, str):
            return None
        try:
            return cls(name)
        except ValueError:
            return None


# ---------------------------------------------------------------------
# Schema helpers
# ---------------------------------------------------------------------
def _str(description: str, enum: Optional[List[str]] = None) -> Dict[str, Any]:
    prop: Dict[str, Any] = {"type": "string", "description": description}
    if enum:
        prop["enum"] = list(enum)
    return prop


def _num(description: str) -> Dict[str, Any]:
    return {"type": "number", "description": description}


def _tool(name: ToolName, description: str, properties: Optional[Dict[str, Any]] = None,
          required: Optional[List[str]] = None) -> ToolDef:
    return ToolDef(
        name=name.value,
        description=description,
        inputSchema=ToolInputSchema(properties=properties or {}, required=required),
    )


DNS_RECORD_TYPES = ["A", "AAAA", "CNAME", "MX", "TXT", "NS", "SRV"]
USAGE_PERIODS = ["1h", "24h", "7d", "30d"]
SSL_TYPES = ["lets_encrypt", "paid"]
BACKUP_RESOURCE_TYPES = ["hosting", "vps"]

_VPS_ID = {"vps_id": _str("VPS ID")}
_DOMAIN_ID = {"domain_id": _str("Domain ID")}
_ACCOUNT_ID = {"account_id": _str("Hosting account ID")}
_DNS_FIELDS = {
    "type": _str("DNS record type", DNS_RECORD_TYPES),
    "name": _str("Record name"),
    "content": _str("Record content/value"),
    "ttl": _num("Time to live (seconds)"),
    "priority": _num("Priority (for MX records)"),
}
_RESOURCE_FIELDS = {
    "resource_id": _str("Resource ID (hosting account or VPS)"),
    "resource_type": _str("Resource type", BACKUP_RESOURCE_TYPES),
}


def _build_tool_defs() -> List[ToolDef]:
    T = ToolName
    return [
        # VPS
        _tool(T.LIST_VPS, "List all VPS instances"),
        _tool(T.GET_VPS, "Get details of a specific VPS instance", _VPS_ID, ["vps_id"]),
        _tool(T.START_VPS, "Start a VPS instance", _VPS_ID, ["vps_id"]),
        _tool(T.STOP_VPS, "Stop a VPS instance", _VPS_ID, ["vps_id"]),
        _tool(T.RESTART_VPS, "Restart a VPS instance", _VPS_ID, ["vps_id"]),
        _tool(T.GET_VPS_USAGE, "Get resource usage statistics for a VPS",
              {**_VPS_ID, "period": _str("Time period for statistics", USAGE_PERIODS)}, ["vps_id"]),
        # Domains
        _tool(T.LIST_DOMAINS, "List all domains"),
        _tool(T.GET_DOMAIN, "Get details of a specific domain", _DOMAIN_ID, ["domain_id"]),
        _tool(T.GET_DOMAIN_DNS, "Get DNS records for a domain", _DOMAIN_ID, ["domain_id"]),
        _tool(T.CREATE_DNS_RECORD, "Create a new DNS record",
              {**_DOMAIN_ID, **_DNS_FIELDS}, ["domain_id", "type", "name", "content"]),
        _tool(T.UPDATE_DNS_RECORD, "Update an existing DNS record",
              {**_DOMAIN_ID, "record_id": _str("DNS record ID"), **_DNS_FIELDS}, ["domain_id", "record_id"]),
        _tool(T.DELETE_DNS_RECORD, "Delete a DNS record",
              {**_DOMAIN_ID, "record_id": _str("DNS record ID")}, ["domain_id", "record_id"]),
        # Hosting
        _tool(T.LIST_HOSTING_ACCOUNTS, "List all hosting accounts"),
        _tool(T.GET_HOSTING_ACCOUNT, "Get details of a specific hosting account", _ACCOUNT_ID, ["account_id"]),
        _tool(T.GET_HOSTING_USAGE, "Get resource usage for a hosting account", _ACCOUNT_ID, ["account_id"]),
        # Email
        _tool(T.LIST_EMAIL_ACCOUNTS, "List email accounts for a domain", _DOMAIN_ID, ["domain_id"]),
        _tool(T.CREATE_EMAIL_ACCOUNT, "Create a new email account",
              {**_DOMAIN_ID, "email": _str("Email address"), "password": _str("Password"), "quota": _num("Quota in MB")},
              ["domain_id", "email", "password"]),
        _tool(T.DELETE_EMAIL_ACCOUNT, "Delete an email account",
              {**_DOMAIN_ID, "email": _str("Email address")}, ["domain_id", "email"]),
        # SSL
        _tool(T.LIST_SSL_CERTIFICATES, "List SSL certificates"),
        _tool(T.GET_SSL_CERTIFICATE, "Get details of an SSL certificate",
              {"certificate_id": _str("SSL certificate ID")}, ["certificate_id"]),
        _tool(T.CREATE_SSL_CERTIFICATE, "Create/order a new SSL certificate",
              {**_DOMAIN_ID, "type": _str("Certificate type", SSL_TYPES)}, ["domain_id", "type"]),
        # Backups
        _tool(T.LIST_BACKUPS, "List backups for a hosting account or VPS",
              _RESOURCE_FIELDS, ["resource_id", "resource_type"]),
        _tool(T.CREATE_BACKUP, "Create a manual backup",
              {**_RESOURCE_FIELDS, "description": _str("Backup description")}, ["resource_id", "resource_type"]),
        _tool(T.RESTORE_BACKUP, "Restore from a backup",
              {"backup_id": _str("Backup ID"), "resource_id": _str("Resource ID to restore to")},
              ["backup_id", "resource_id"]),
        # Account
        _tool(T.GET_ACCOUNT_INFO, "Get account information and balance"),
        _tool(T.GET_INVOICES, "List invoices",
              {"limit": _num("Number of invoices to return"), "offset": _num("Offset for pagination")}),
    ]


class Catalog:
    """Ordered, read-only tool registry. Performs no validation of calls."""

    def __init__(self, tool_defs: Iterable[ToolDef]):
        by_name: Dict[str, ToolDef] = {}
        for t in tool_defs:
            if t.name in by_name:
                raise ValueError(f"duplicate tool name: {t.name}")
            by_name[t.name] = t
        self._by_name = by_name
        self._ordered = tuple(by_name.values())

    def list(self) -> List[ToolDef]:
        return list(self._ordered)

    def describe(self, name: Any) -> Optional[ToolDef]:
        if not isinstance(name, str):
            return None
        return self._by_name.get(name)

    def names(self) -> List[str]:
        return [t.name for t in self._ordered]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._by_name

    def __iter__(self) -> Iterator[ToolDef]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)


def default_catalog() -> Catalog:
    return Catalog(_build_tool_defs())
