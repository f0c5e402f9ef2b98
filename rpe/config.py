from typing import NamedTuple

WIRED_INTERFACES = (
    'Ethernet',  # Windows
    'eth0',  # Linux legacy
    'eno1',  # Linux
)

DEST_PORT = 68  # DHCP replies are written to the client port


class AckConfig(NamedTuple):
    """
    Everything needed to build and send one ACK.

    Only ``dns_suffix`` comes from the user, the other fields are the fixed
    values the AMT device is provisioned with.
    """
    dns_suffix: str
    assigned_ip: str = '169.254.214.131'
    client_mac: str = '54-B2-03-89-D3-B9'
    subnet_mask: str = '255.255.255.0'
    dns_server: str = '8.8.8.8'
    time_offset: int = 0
    default_ttl: int = 64
    lease_time: int = 86400
    renewal_time: int = 43200
    rebinding_time: int = 75600
    wired_interfaces: tuple[str, ...] = WIRED_INTERFACES
    dest_port: int = DEST_PORT
    timeout: float | None = None
