from loguru import logger

from ..config import AckConfig
from ..exceptions import ConfigurationError, EncodingError
from .dhcp import (DHCPMessageType, DHCPOption, DHCPPacket, OpCode, Option,
                   int_to_bytes, ip_to_bytes, mac_aton)

TRANSACTION_ID = 10392900
BROADCAST_FLAG = 32768


def create_reply_packet(config: AckConfig, msg_type: DHCPMessageType,
                        server_id, yiaddr,
                        options: list[Option]) -> DHCPPacket:
    """
    Assemble a BOOTREPLY carrying ``msg_type`` and the given options.

    The transaction id, flags, gateway and client hardware address are fixed
    values; the AMT device does not match them against a request.

    Raises:
        EncodingError: the transaction id or flags could not be encoded.
        ConfigurationError: the configured MAC or an address is malformed.
    """
    packet = DHCPPacket(OpCode.BOOTREPLY)

    xid = int_to_bytes(TRANSACTION_ID, 4)
    if xid is None:
        raise EncodingError("invalid transaction Id")
    packet.xid = xid

    flags = int_to_bytes(BROADCAST_FLAG, 2)
    if flags is None:
        raise EncodingError("invalid flags value")
    packet.flags = flags

    try:
        packet.yiaddr = yiaddr
        packet.giaddr = '0.0.0.0'
        server = ip_to_bytes(server_id)
    except ValueError as e:
        raise ConfigurationError(f"invalid address: {e}") from e

    try:
        packet.chaddr = mac_aton(config.client_mac)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    packet.add_option(DHCPOption.DHCP_MSG_TYPE,
                      bytes([DHCPMessageType(msg_type).value]))
    packet.add_option(DHCPOption.SERVER_ID, server)
    for opt in options:
        packet.add_option(opt.code, opt.value)
    packet.pad_to_min_size()

    logger.debug(f"built {DHCPMessageType(msg_type).name} packet, "
                 f"{len(packet)} bytes, {len(options)} options")
    return packet
