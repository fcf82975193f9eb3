"""The `show` command and everything it can display."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from ..clock import Clock
from ..commands import command
from ..context import Context
from ..custom_types import ModeKind
from ..program_exceptions import CommandError, ModeViolationError
from ..program_logging import get_logger
from ..running_config import default_startup_config, render_running_config

SHOW_SUBCOMMANDS = (
    "running-config",
    "startup-config",
    "access-lists",
    "ip",
    "version",
    "ntp",
    "processes",
    "clock",
    "vlan",
    "interfaces",
    "uptime",
    "login",
    "crypto key",
    "crypto certificate",
    "crypto dynamic-map",
    "crypto map",
    "crypto engine",
)

_ROUTE_CODES = """\
Codes: L - local, C - connected, S - static, R - RIP, M - mobile, B - BGP
       D - EIGRP, EX - EIGRP external, O - OSPF, IA - OSPF inter area
       N1 - OSPF NSSA external type 1, N2 - OSPF NSSA external type 2
       E1 - OSPF external type 1, E2 - OSPF external type 2, E - EGP
       i - IS-IS, L1 - IS-IS level-1, L2 - IS-IS level-2, ia - IS-IS inter area
       * - candidate default, U - per-user static route, o - ODR
       P - periodic downloaded static route
"""

_PROCESSES = """\
CPU utilization for five seconds: 0%/0%; one minute: 0%; five minutes: 0%
 PID Q  Ty       PC  Runtime(uS)    Invoked   uSecs    Stacks TTY Process
   1 C  sp 602F3AF0            0       1627       0 2600/3000   0 Load Meter
   2 L  we 60C5BE00            4        136      29 5572/6000   0 CEF Scanner
   3 L  st 602D90F8         1676        837    2002 5740/6000   0 Check heaps
   4 C  we 602D08F8            0          1       0 5568/6000   0 Chunk Manager
   5 C  we 602DF0E8            0          1       0 5592/6000   0 Pool Manager"""

_PROCESSES_CPU = """\
CPU utilization for five seconds: 8%/4%; one minute: 6%; five minutes: 5%
 PID Runtime(uS)   Invoked  uSecs    5Sec   1Min   5Min TTY Process
   1         384     32789     11   0.00%  0.00%  0.00%   0 Load Meter
   2        2752      1179   2334   0.73%  1.06%  0.29%   0 Exec
   3      318592      5273  60419   0.00%  0.15%  0.17%   0 Check heaps
   4           4         1   4000   0.00%  0.00%  0.00%   0 Pool Manager
   5        6472      6568    985   0.00%  0.00%  0.00%   0 ARP Input"""

_PROCESSES_CPU_HISTORY = """\
CPU% per minute (last 60 minutes)
100
 90
 80         *  *                     * *     *  * *  *
 70  * * ***** *  ** ***** ***  **** ******  *  *******     * *
 60  #***##*##*#***#####*#*###*****#*###*#*#*##*#*##*#*##*****#
 50  ##########################################################
 40  ##########################################################
 30  ##########################################################
 20  ##########################################################
 10  ##########################################################
    0....5....1....1....2....2....3....3....4....4....5....5....
              0    5    0    5    0    5    0    5    0    5"""

_PROCESSES_MEMORY = """\
Total: 106206400, Used: 7479116, Free: 98727284
 PID TTY  Allocated      Freed    Holding    Getbufs    Retbufs Process
   0   0      81648       1808    6577644          0          0 *Init*
   0   0        572     123196        572          0          0 *Sched*
   0   0   10750692    3442000       5812    2813524          0 *Dead*
   1   0        276        276       3804          0          0 Load Meter"""

ShowHandler = Callable[[List[str], Context, Optional[Clock]], None]


def _require_clock(clock: Optional[Clock]) -> Clock:
    if clock is None:
        raise CommandError("Clock functionality is unavailable.")
    return clock


def _show_clock(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    print(_require_clock(clock).format_clock())


def _show_uptime(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    print(_require_clock(clock).format_uptime())


def _show_version(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    print(
        "Cisco IOS Software, C2900 Software (C2900-UNIVERSALK9-M), "
        "Version 15.1(4)M4, RELEASE SOFTWARE (fc2)"
    )
    print("Compiled Thurs 5-Jan-12 15:41 by pt_team")
    print(" ")
    print("ROM: System Bootstrap, Version 15.1(4)M4, RELEASE SOFTWARE (fc1)")
    print(_require_clock(clock).format_uptime())
    print(" ")
    print("Device Details... ")
    print("PNF Router")


def _show_interfaces(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    if ctx.selected_interface is None:
        raise CommandError("No interface selected. Use the 'interface' command first.")
    if not ctx.state.ip_addresses:
        print("No interfaces found.")
        return
    for interface, (ip, _) in ctx.state.ip_addresses.items():
        print(f"{interface} is up, line protocol is up")
        print(f"  Internet address is {ip}, subnet mask 255.255.255.0")
        print("  MTU 1500 bytes, BW 10000 Kbit, DLY 100000 usec")
        print("  Encapsulation ARPA, loopback not set, keepalive set (10 sec)")
        print('  Last clearing of "show interface" counters: never')
        print("  Input queue: 0/2000/0/0 (size/max/drops/flushes); Total output drops: 0")
        print("  5 minute input rate 1000 bits/sec, 10 packets/sec")
        print("  5 minute output rate 500 bits/sec, 5 packets/sec")
        print("  100 packets input, 1000 bytes, 10 no buffer")
        print("  50 packets output, 500 bytes, 0 underruns")


def _show_ip_route(args: List[str], ctx: Context) -> None:
    routes = ctx.state.routes
    match args:
        case []:
            print(_ROUTE_CODES)
            if not routes:
                print("No routes configured.")
                return
            for destination, route in routes.items():
                code = "C" if route.is_connected else "S"
                print(f"{code}\t{destination} {route.netmask} via {route.next_hop}")
        case [destination]:
            route = routes.get(destination)
            if route is None:
                print(f"No route found for {destination}.")
                return
            known_via = "connected" if route.is_connected else "static"
            print(f"Routing entry for {destination}/{route.netmask}")
            print(f'Known via "{known_via}"')
            print("  Routing Descriptor Blocks:")
            print(f"  * {route.next_hop}")
        case _:
            raise CommandError(
                "Invalid arguments. Use 'show ip route' or 'show ip route <ip-address>'."
            )


def _show_ip_interface_brief(ctx: Context) -> None:
    print(
        f"{'Interface':<22} {'IP-Address':<15} {'OK?':<8} "
        f"{'Method':<20} {'Status':<20} {'Protocol':<10}"
    )
    for interface, (ip, _) in ctx.state.ip_addresses.items():
        is_up = ctx.state.interface_status.get(interface, False)
        status = "up" if is_up else "administratively down"
        protocol = "up" if is_up else "down"
        print(
            f"{interface:<22} {ip:<15} YES     unset/manual        {status}         {protocol}"
        )


def _show_ospf_neighbor(ctx: Context) -> None:
    ospf = ctx.state.ospf
    print("Current OSPF Configuration:")
    print(f"Router ID: {ospf.router_id or 'Not set'}")
    print(f"Administrative Distance: {ospf.distance if ospf.distance is not None else 110}")
    print(f"Default Information Originate: {str(ospf.default_information_originate).lower()}")
    print(f"Passive Interfaces: {ospf.passive_interfaces}")


def _show_ip(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    match args[1:]:
        case ["ospf", *rest]:
            if rest[:1] != ["neighbor"]:
                raise CommandError("Invalid OSPF subcommand. Use 'neighbor'")
            _show_ospf_neighbor(ctx)
        case ["route", *rest]:
            _show_ip_route(rest, ctx)
        case ["interface", *rest]:
            if rest[:1] != ["brief"]:
                raise CommandError("Invalid interface subcommand. Use 'brief'")
            _show_ip_interface_brief(ctx)
        case _:
            raise CommandError(
                "Invalid IP subcommand. Use 'ospf neighbor', 'route', or 'interface brief'"
            )


def _show_vlan(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    if not ctx.vlan_names and not ctx.vlan_states:
        raise CommandError("No VLAN information available.")
    print(f"{'VLAN':<6} {'Name':<30} {'Status':<10} Ports")
    for vlan_id in sorted(set(ctx.vlan_names) | set(ctx.vlan_states)):
        name = ctx.vlan_names.get(vlan_id, f"VLAN{vlan_id}")
        status = ctx.vlan_states.get(vlan_id, "active")
        print(f"{vlan_id:<6} {name:<30} {status:<10}  ")


def _show_running_config(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    print("Building configuration...\n")
    print("Current configuration : 0 bytes\n")
    print(render_running_config(ctx))


def _show_startup_config(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    print("Building configuration...\n")
    config = ctx.config
    if config.last_written is not None and config.startup_config is not None:
        print(f"Startup configuration (last saved: {config.last_written}):\n")
        print(config.startup_config)
    else:
        print("Startup configuration (default):\n")
        print(default_startup_config())


def _show_login(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    print("A default login delay of 1 seconds is applied.")
    print("No Quiet-Mode access list has been configured.")
    print(" ")
    print("Router NOT enabled to watch for login Attacks")


def _show_ntp(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    match args[1:]:
        case ["associations"]:
            if not ctx.ntp_associations:
                print("No NTP associations configured.")
                return
            print(
                "address         ref clock       st   when     poll    reach  "
                "delay          offset            disp"
            )
            for a in ctx.ntp_associations:
                print(
                    f" ~{a.address}       {a.ref_clock}          {a.st}   {a.when}"
                    f"        {a.poll}      {a.reach}      {a.delay:.2f}"
                    f"           {a.offset:.2f}              {a.disp:.2f}"
                )
            print(
                " * sys.peer, # selected, + candidate, - outlyer, "
                "x falseticker, ~ configured"
            )
        case []:
            print(f"NTP Master: {'Enabled' if ctx.ntp_master else 'Disabled'}")
            print(
                "NTP Authentication: "
                f"{'Enabled' if ctx.ntp_authentication_enabled else 'Disabled'}"
            )
            if ctx.ntp_authentication_keys:
                print("NTP Authentication Keys:")
                for number, key in sorted(ctx.ntp_authentication_keys.items()):
                    print(f"Key {number}: {key}")
            if ctx.ntp_trusted_keys:
                print("NTP Trusted Keys:")
                for number in sorted(ctx.ntp_trusted_keys):
                    print(f"Trusted Key {number}")
        case _:
            raise CommandError("Invalid NTP subcommand. Use 'associations' or no subcommand")


def _show_access_lists(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    if not ctx.state.acls:
        print("No access lists configured.")
        return
    for acl in ctx.state.acls.values():
        print(f"\nAccess list: {acl.name}")
        for entry in acl.entries:
            line = f"  {entry.render()}"
            if entry.matches is not None:
                line += f" ({entry.matches} matches)"
            print(line)


def _show_processes(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    match args[1:]:
        case []:
            print(_PROCESSES)
        case ["cpu"]:
            print(_PROCESSES_CPU)
        case ["cpu", "history"]:
            print(_PROCESSES_CPU_HISTORY)
        case ["memory"]:
            print(_PROCESSES_MEMORY)
        case _:
            raise CommandError(
                "Invalid subcommand for 'show processes'. "
                "Valid subcommands are 'cpu', 'cpu history', and 'memory'."
            )


def _show_crypto(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    if len(args) < 2:
        raise CommandError("Specify 'key' or 'certificate' after 'crypto'.")
    config = ctx.config
    match args[1]:
        case "key":
            if not config.crypto_keys:
                print("No crypto keys found.")
                return
            print("Crypto keys:")
            print("------------")
            for name, data in config.crypto_keys.items():
                print(f"Key: {name}")
                if "BEGIN RSA" in data:
                    print("Type: RSA")
                elif "BEGIN DSA" in data:
                    print("Type: DSA")
                print("Usage: General Purpose")
                print("------------")
        case "certificate":
            if not config.certificates:
                print("No certificates found.")
                return
            print("Certificates:")
            print("-------------")
            for name, data in config.certificates.items():
                print(f"Certificate: {name}")
                for line in data.splitlines():
                    if line.startswith(("Subject:", "Issuer:")):
                        print(line)
                print("Status: Active")
                print("-------------")
        case "dynamic-map":
            print("Crypto dynamic-map entries:")
            for entry in config.crypto_dynamic_maps.values():
                print(f"Dynamic-map '{entry.name}' sequence {entry.seq_num}")
        case "map":
            print("Crypto map entries:")
            for entry in config.crypto_maps.values():
                print(f"Crypto map '{entry.name}' sequence {entry.seq_num}")
                if entry.interface_id:
                    print(f"  Interface: {entry.interface_id}")
                local = config.crypto_local_addresses.get(entry.name)
                if local:
                    print(f"  Local address: {local}")
        case "engine":
            print("Crypto engine configuration:")
            if config.crypto_engine_accelerator is not None:
                print(
                    "Hardware crypto accelerator configured in slot "
                    f"{config.crypto_engine_accelerator}"
                )
            else:
                print("No hardware crypto accelerator configured")
        case _:
            raise CommandError(
                "Invalid crypto show command. "
                "Use 'show crypto key' or 'show crypto certificate'."
            )


# Shown in user and privileged mode.
_EXEC_VIEWS: Dict[str, ShowHandler] = {
    "clock": _show_clock,
    "uptime": _show_uptime,
    "version": _show_version,
    "interfaces": _show_interfaces,
    "ip": _show_ip,
    "vlan": _show_vlan,
}

# Privileged mode only.
_PRIVILEGED_VIEWS: Dict[str, ShowHandler] = {
    "running-config": _show_running_config,
    "startup-config": _show_startup_config,
    "login": _show_login,
    "ntp": _show_ntp,
    "access-lists": _show_access_lists,
    "processes": _show_processes,
    "crypto": _show_crypto,
}


@command(
    "show",
    "Display all the show commands when specific command is passed",
    subcommands=SHOW_SUBCOMMANDS,
)
def h_show(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    """Display router state.

    `args[0]` names the view; any further words are passed on to it.
    """
    logger = get_logger("handlers")
    ctx.require_mode(
        "Show commands are only available in User EXEC mode and Privileged EXEC mode.",
        ModeKind.USER,
        ModeKind.PRIVILEGED,
    )
    view = args[0] if args else ""

    if view in _EXEC_VIEWS:
        _EXEC_VIEWS[view](args, ctx, clock)
    elif view in _PRIVILEGED_VIEWS:
        if not ctx.in_mode(ModeKind.PRIVILEGED):
            raise ModeViolationError(
                f"The '{view}' command is only available in Privileged EXEC mode."
            )
        _PRIVILEGED_VIEWS[view](args, ctx, clock)
    else:
        raise CommandError(f"Invalid show subcommand: {view}")
    logger.debug(f"Displayed 'show {' '.join(args)}'")
