from loguru import logger

from .config import AckConfig
from .net.dhcp import DHCPMessageType, DHCPPacket
from .net.locator import (NetworkEnumerator, broadcast_address_for,
                          current_ipv4_address)
from .net.options import build_options
from .net.reply import create_reply_packet
from .net.transport import UDPConnection


def send_ack(config: AckConfig,
             enumerator: NetworkEnumerator | None = None,
             connection: UDPConnection | None = None) -> DHCPPacket:
    """
    Broadcast one DHCP ACK carrying ``config.dns_suffix`` as option 15.

    The server identifier is the IPv4 address of the wired interface and the
    packet goes to the /24 broadcast address of that interface on
    ``config.dest_port``. The connection is closed before returning, also
    when building or writing the packet fails.

    Returns the packet that was written.
    """
    # DHCP packets are broadcasted
    server_ip = current_ipv4_address(enumerator, config.wired_interfaces)
    broadcast = broadcast_address_for(server_ip)
    logger.info(f"Server address {server_ip}, "
                f"broadcasting to {broadcast}:{config.dest_port}")

    if connection is None:
        connection = UDPConnection(timeout=config.timeout)

    with connection:
        connection.connect(broadcast, config.dest_port)
        options = build_options(config)
        packet = create_reply_packet(config, DHCPMessageType.ACK, server_ip,
                                     config.assigned_ip, options)
        n = connection.write(packet.encode())

    logger.info(f"Sent DHCP ACK ({n} bytes) with DNS suffix "
                f"{config.dns_suffix!r}")
    return packet
