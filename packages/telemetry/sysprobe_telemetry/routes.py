"""Socket tables from /proc/net/{tcp,udp,tcp6,udp6}."""

from __future__ import annotations

from sysprobe_decoders import MalformedSourceError, RouteStatus, RouteType, decode_endpoint

from .models import NetworkRoute
from .sources import SourceReader, default_reader


ROUTE_FILES: tuple[RouteType, ...] = (RouteType.TCP, RouteType.UDP, RouteType.TCP6, RouteType.UDP6)


def parse_routes(text: str, separator: str, route_type: RouteType) -> list[NetworkRoute]:
    routes: list[NetworkRoute] = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        if ":" not in line:
            continue
        fields = line.split()
        if fields[0] == "sl":
            continue
        if len(fields) < 4:
            raise MalformedSourceError(f"{route_type.value} line {line_no}: expected at least 4 fields, got {len(fields)}")

        local_address, local_port = decode_endpoint(fields[1], separator)
        remote_address, remote_port = decode_endpoint(fields[2], separator)
        status = RouteStatus.from_tcp_code(fields[3]) if route_type.is_tcp else RouteStatus.LISTEN
        routes.append(
            NetworkRoute(
                route_type=route_type,
                local_address=local_address,
                local_port=local_port,
                remote_address=remote_address,
                remote_port=remote_port,
                status=status,
            )
        )
    return routes


def network_routes(reader: SourceReader | None = None) -> list[NetworkRoute]:
    """Every socket entry, in tcp, udp, tcp6, udp6 order."""
    reader = default_reader(reader)
    routes: list[NetworkRoute] = []
    for route_type in ROUTE_FILES:
        text = reader.read_text(reader.procfs("net", route_type.value))
        routes.extend(parse_routes(text, route_type.separator, route_type))
    return routes
