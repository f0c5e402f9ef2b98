from .dhcp import (MAGIC_COOKIE, MIN_PACKET_SIZE, DHCPMessageType, DHCPOption,
                   DHCPPacket, OpCode, Option, int_to_bytes, mac_aton, mac_ntoa)
from .locator import (NetifacesEnumerator, NetworkEnumerator,
                      broadcast_address_for, current_ipv4_address)
from .options import build_options
from .reply import create_reply_packet
from .transport import UDPConnection
