"""Rendering of the running and startup configuration text."""

from __future__ import annotations

from typing import List

from .context import Context

DEFAULT_INTERFACE = "FastEthernet0/1"

DEFAULT_STARTUP_CONFIG = """
Building configuration...

Current configuration : 0 bytes

version 15.1
no service timestamps log datetime msec
no service password-encryption
!
hostname Router
!
enable password 5
enable secret 5
!
interface FastEthernet0/0
no ip address
shutdown
!
!
end
"""


def default_startup_config() -> str:
    """The factory startup configuration shown before anything is saved."""
    return DEFAULT_STARTUP_CONFIG


def render_running_config(ctx: Context) -> str:
    """Render the session as IOS-style running-config text."""
    config = ctx.config
    state = ctx.state
    lines: List[str] = [
        "version 15.1",
        "no service timestamps log datetime msec",
        "service password-encryption"
        if config.password_encryption
        else "no service password-encryption",
        "!",
        f"hostname {config.hostname}",
        "!",
        f"enable password 5 {config.encrypted_password or ''}",
        f"enable secret 5 {config.encrypted_secret or ''}",
        "!",
    ]

    interface = ctx.selected_interface or DEFAULT_INTERFACE
    lines.append(f"interface {interface}")
    if interface in state.ip_addresses:
        ip, netmask = state.ip_addresses[interface]
        lines.append(f" ip address {ip} {netmask}")
    else:
        lines.append(" no ip address")
    lines += [" duplex auto", " speed auto"]
    lines.append(" no shutdown" if state.interface_status.get(interface) else " shutdown")
    lines += ["!", "interface Vlan1", " no ip address", " shutdown", "!"]

    lines.append("ip classes")
    for destination, route in state.routes.items():
        lines.append(f"ip route {destination} {route.netmask} {route.next_hop}")
    lines.append("!")

    ospf = state.ospf
    process_id = ospf.process_id if ospf.process_id is not None else "N/A"
    lines += [f"router ospf {process_id}", " log-adjacency-changes"]
    if ospf.router_id:
        lines.append(f" router-id {ospf.router_id}")
    for passive in ospf.passive_interfaces:
        lines.append(f" passive-interface {passive}")
    for network_key, area_id in ospf.networks.items():
        lines.append(f" network {network_key} area {area_id}")
    if ospf.default_information_originate:
        lines.append(" default-information originate")
    lines.append("!")

    for acl in state.acls.values():
        lines += ["!", f"ip access-list {acl.kind} {acl.name}"]
        lines += [f" {entry.render()}" for entry in acl.entries]

    lines += ["!", "!", "end"]
    return "\n".join(lines) + "\n"
