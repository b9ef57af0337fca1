 # handlers.py
 # - One async handler per ToolName; each makes exactly one Hostinger call
 # - render(label, payload): shared result shaping
 # - HANDLERS: ToolName -> handler binding (checked 1:1 against the catalog)

from __future__ import annotations

import json
from typing import Any, Awaitable, Callable, Dict, Mapping, Protocol

from hostinger_mcp.catalog import ToolName
from hostinger_mcp.errors import MissingArgument
from hostinger_mcp.schemas.mcp import ToolResult


class HostingerAPI(Protocol):
    async def invoke(self, method: str, path: str, body: Dict[str, Any] | None = None) -> Any: ...


Handler = Callable[[HostingerAPI, Dict[str, Any]], Awaitable[ToolResult]]

DEFAULT_USAGE_PERIOD = "24h"
DEFAULT_INVOICE_LIMIT = 10
DEFAULT_INVOICE_OFFSET = 0


def render(label: str, payload: Any) -> ToolResult:
    """``"{label}: {pretty json}"`` as a single text block."""
    return ToolResult.text(f"{label}: {json.dumps(payload, indent=2, ensure_ascii=False)}")


def _require(args: Mapping[str, Any], key: str) -> Any:
    val = args.get(key)
    if val is None:
        raise MissingArgument(key)
    return val


def _without(args: Mapping[str, Any], *keys: str) -> Dict[str, Any]:
    return {k: v for k, v in args.items() if k not in keys}


# ---------------------------
# VPS
# ---------------------------
async def list_vps(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
    return render("VPS instances", await api.invoke("GET", "/v1/vps"))


async def get_vps(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
    vps_id = _require(args, "vps_id")
    return render("VPS details", await api.invoke("GET", f"/v1/vps/{vps_id}"))


def _vps_action(action: str) -> Handler:
    async def handler(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
        vps_id = _require(args, "vps_id")
        return render(f"VPS {action} result", await api.invoke("POST", f"/v1/vps/{vps_id}/{action}"))
    handler.__name__ = f"{action}_vps"
    return handler


start_vps = _vps_action("start")
stop_vps = _vps_action("stop")
restart_vps = _vps_action("restart")


async def get_vps_usage(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
    vps_id = _require(args, "vps_id")
    period = args.get("period") or DEFAULT_USAGE_PERIOD
    return render("VPS usage statistics", await api.invoke("GET", f"/v1/vps/{vps_id}/usage?period={period}"))


# ---------------------------
# Domains / DNS
# ---------------------------
async def list_domains(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
    return render("Domains", await api.invoke("GET", "/v1/domains"))


async def get_domain(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
    domain_id = _require(args, "domain_id")
    return render("Domain details", await api.invoke("GET", f"/v1/domains/{domain_id}"))


async def get_domain_dns(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
    domain_id = _require(args, "domain_id")
    return render("DNS records", await api.invoke("GET", f"/v1/domains/{domain_id}/dns"))


async def create_dns_record(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
    domain_id = _require(args, "domain_id")
    for key in ("type", "name", "content"):
        _require(args, key)
    record = _without(args, "domain_id")
    return render("Created DNS record", await api.invoke("POST", f"/v1/domains/{domain_id}/dns", record))


async def update_dns_record(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
    domain_id = _require(args, "domain_id")
    record_id = _require(args, "record_id")
    record = _without(args, "domain_id", "record_id")
    return render("Updated DNS record", await api.invoke("PUT", f"/v1/domains/{domain_id}/dns/{record_id}", record))


async def delete_dns_record(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
    domain_id = _require(args, "domain_id")
    record_id = _require(args, "record_id")
    await api.invoke("DELETE", f"/v1/domains/{domain_id}/dns/{record_id}")
    return ToolResult.text(f"Successfully deleted DNS record {record_id}")


# ---------------------------
# Hosting
# ---------------------------
async def list_hosting_accounts(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
    return render("Hosting accounts", await api.invoke("GET", "/v1/hosting"))


async def get_hosting_account(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
    account_id = _require(args, "account_id")
    return render("Hosting account details", await api.invoke("GET", f"/v1/hosting/{account_id}"))


async def get_hosting_usage(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
    account_id = _require(args, "account_id")
    return render("Hosting usage", await api.invoke("GET", f"/v1/hosting/{account_id}/usage"))


# ---------------------------
# Email
# ---------------------------
async def list_email_accounts(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
    domain_id = _require(args, "domain_id")
    return render("Email accounts", await api.invoke("GET", f"/v1/domains/{domain_id}/email"))


async def create_email_account(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
    domain_id = _require(args, "domain_id")
    _require(args, "email")
    _require(args, "password")
    account = _without(args, "domain_id")
    return render("Created email account", await api.invoke("POST", f"/v1/domains/{domain_id}/email", account))


async def delete_email_account(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
    domain_id = _require(args, "domain_id")
    email = _require(args, "email")
    await api.invoke("DELETE", f"/v1/domains/{domain_id}/email/{email}")
    return ToolResult.text(f"Successfully deleted email account {email}")


# ---------------------------
# SSL
# ---------------------------
async def list_ssl_certificates(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
    return render("SSL certificates", await api.invoke("GET", "/v1/ssl"))


async def get_ssl_certificate(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
    certificate_id = _require(args, "certificate_id")
    return render("SSL certificate details", await api.invoke("GET", f"/v1/ssl/{certificate_id}"))


async def create_ssl_certificate(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
    _require(args, "domain_id")
    _require(args, "type")
    return render("Created SSL certificate", await api.invoke("POST", "/v1/ssl", dict(args)))


# ---------------------------
# Backups
# ---------------------------
async def list_backups(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
    resource_id = _require(args, "resource_id")
    resource_type = _require(args, "resource_type")
    return render("Backups", await api.invoke("GET", f"/v1/{resource_type}/{resource_id}/backups"))


async def create_backup(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
    resource_id = _require(args, "resource_id")
    resource_type = _require(args, "resource_type")
    backup = _without(args, "resource_id", "resource_type")
    return render("Created backup", await api.invoke("POST", f"/v1/{resource_type}/{resource_id}/backups", backup))


async def restore_backup(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
    backup_id = _require(args, "backup_id")
    resource_id = _require(args, "resource_id")
    result = await api.invoke("POST", f"/v1/backups/{backup_id}/restore", {"resource_id": resource_id})
    return render("Restore backup result", result)


# ---------------------------
# Account
# ---------------------------
async def get_account_info(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
    return render("Account information", await api.invoke("GET", "/v1/account"))


async def get_invoices(api: HostingerAPI, args: Dict[str, Any]) -> ToolResult:
    limit = args.get("limit", DEFAULT_INVOICE_LIMIT)
    offset = args.get("offset", DEFAULT_INVOICE_OFFSET)
    return render("Invoices", await api.invoke("GET", f"/v1/invoices?limit={limit}&offset={offset}"))


# ---------------------------
# Tool registry
# ---------------------------
HANDLERS: Dict[ToolName, Handler] = {
    # VPS
    ToolName.LIST_VPS: list_vps,
    ToolName.GET_VPS: get_vps,
    ToolName.START_VPS: start_vps,
    ToolName.STOP_VPS: stop_vps,
    ToolName.RESTART_VPS: restart_vps,
    ToolName.GET_VPS_USAGE: get_vps_usage,
    # Domains
    ToolName.LIST_DOMAINS: list_domains,
    ToolName.GET_DOMAIN: get_domain,
    ToolName.GET_DOMAIN_DNS: get_domain_dns,
    ToolName.CREATE_DNS_RECORD: create_dns_record,
    ToolName.UPDATE_DNS_RECORD: update_dns_record,
    ToolName.DELETE_DNS_RECORD: delete_dns_record,
    # Hosting
    ToolName.LIST_HOSTING_ACCOUNTS: list_hosting_accounts,
    ToolName.GET_HOSTING_ACCOUNT: get_hosting_account,
    ToolName.GET_HOSTING_USAGE: get_hosting_usage,
    # Email
    ToolName.LIST_EMAIL_ACCOUNTS: list_email_accounts,
    ToolName.CREATE_EMAIL_ACCOUNT: create_email_account,
    ToolName.DELETE_EMAIL_ACCOUNT: delete_email_account,
    # SSL
    ToolName.LIST_SSL_CERTIFICATES: list_ssl_certificates,
    ToolName.GET_SSL_CERTIFICATE: get_ssl_certificate,
    ToolName.CREATE_SSL_CERTIFICATE: create_ssl_certificate,
    # Backups
    ToolName.LIST_BACKUPS: list_backups,
    ToolName.CREATE_BACKUP: create_backup,
    ToolName.RESTORE_BACKUP: restore_backup,
    # Account
    ToolName.GET_ACCOUNT_INFO: get_account_info,
    ToolName.GET_INVOICES: get_invoices,
}
