# Packet format
# -------------
#
# Offset    Length   Notes
# ------    ------   -----
#
#   0       1        Operation code with 1 being request and 2 being response
#   1       1        Hardware type with 1 being "Ethernet 10Mb"
#   2       1        Hardware address length with 6 for Ethernet
#   3       1        Hops - usually 0 unless DHCP relaying in operation
#   4-7     4        Transaction ID
#   8-9     2        Seconds - might be used by a server to prioritise requests
#  10-11    2        Flags (only most significan bit used for broadcast)
#  12-15    4        Client Internet address (might be requested by client)
#  16-19    4        Your Internet address (the IP assigned by the server)
#  20-23    4        Server Internet address (the IP of the server)
#  24-27    4        Gateway Internet address (if DHCP relaying in operation)
#  28-43    16       Client hardware address - only first hlen bytes used
#  44-107   64       Text name of server (unused, zero)
# 108-235   128      Boot file name (unused, zero)
# 236-239   4        Magic cookie (decimal values 99, 130, 83, 99 )
#   240     1        Options start here, terminated by END (255)
#
# Multi-byte integers written by this module (xid, flags and the time
# options) are little-endian. The AMT firmware on the receiving side expects
# exactly these bytes.

import base64
import ipaddress
from enum import Enum
from struct import pack, unpack
from typing import NamedTuple

from loguru import logger

MAGIC_COOKIE = bytes([99, 130, 83, 99])
HEADER_SIZE = 241
MIN_PACKET_SIZE = 272
MAX_OPTION_SIZE = 255
CHADDR_SIZE = 16


class OpCode(Enum):
    BOOTREQUEST = 1
    BOOTREPLY = 2


class DHCPMessageType(Enum):
    # 53 Values
    DISCOVER = 1  # RFC 2131
    OFFER = 2  # RFC 2131
    REQUEST = 3  # RFC 2131
    DECLINE = 4  # RFC 2131
    ACK = 5  # RFC 2131
    NAK = 6  # RFC 2131
    RELEASE = 7  # RFC 2131
    INFORM = 8  # RFC 2131


class DHCPOption(Enum):
    PAD = 0  # 0 [RFC2132] None
    SUBNET_MASK = 1  # 4 [RFC2132] Subnet Mask Value
    TIME_OFFSET = 2  # 4 [RFC2132] Time Offset in Seconds from UTC
    NAME_SERVER = 5  # N [RFC2132] N/4 IEN-116 Server addresses
    DOMAIN_NAME_SERVER = 6  # N [RFC2132] N/4 DNS Server addresses
    HOSTNAME = 12  # N [RFC2132] Hostname string
    DOMAIN_NAME = 15  # N [RFC2132] The DNS domain name of the client
    DEFAULT_IP_TTL = 23  # 1 [RFC2132] Default IP Time to Live
    ADDRESS_REQUEST = 50  # 4 [RFC2132] Requested IP Address
    IP_LEASE_TIME = 51  # 4 [RFC2132] IP Address Lease Time
    DHCP_MSG_TYPE = 53  # 1 [RFC2132] DHCP Message Type
    SERVER_ID = 54  # 4 [RFC2132] DHCP Server Identification
    PARAMETER_LIST = 55  # N [RFC2132] Parameter Request List
    RENEWAL_TIME = 58  # 4 [RFC2132] DHCP Renewal (T1) Time
    REBINDING_TIME = 59  # 4 [RFC2132] DHCP Rebinding (T2) Time
    CLIENT_ID = 61  # N [RFC2132] Client Identifier
    END = 255  # 0 [RFC2132] None


class Option(NamedTuple):
    code: DHCPOption
    value: bytes


def int_to_bytes(num: int, width: int) -> bytes | None:
    """
    Encode an unsigned integer as little-endian bytes.

    Only widths of 2 and 4 bytes are supported. Any other width is logged and
    ``None`` is returned, leaving the caller to decide how to fail.
    """
    if width == 2:
        return pack('<H', num & 0xffff)
    elif width == 4:
        return pack('<I', num & 0xffffffff)
    logger.warning(f"int_to_bytes() - invalid byte count request: {width}")
    return None


def mac_aton(s: str) -> bytes:
    try:
        parts = s.replace('-', ':').split(':')
        if len(parts) not in (6, 8, 20) or any(len(p) != 2 for p in parts):
            raise ValueError
        haddr = [int(n, base=16) for n in parts]
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid MAC address {s!r}.")
    return bytes(haddr)


def mac_ntoa(b: bytes) -> str:
    return ':'.join([f"{x:02x}" for x in b])


def ip_to_bytes(ip) -> bytes:
    """
    Normalize an address to the 4 bytes of an IPv4 header field.

    Accepts dotted strings, packed bytes and ``ipaddress`` objects. Longer
    representations (IPv4-mapped IPv6) are cut down to their last 4 bytes.
    """
    if isinstance(ip, (bytes, bytearray)):
        packed = bytes(ip)
    else:
        if isinstance(ip, str):
            ip = ipaddress.ip_address(ip.strip())
        packed = ip.packed
    if len(packed) < 4:
        raise ValueError(f"Invalid IPv4 address {ip!r}.")
    return packed[-4:]


def bytes_to_ip(b: bytes) -> str:
    return str(ipaddress.IPv4Address(bytes(b)))


def readable_packet(data: bytes) -> str:
    bpr = 16  # bpr is Bytes Per Row
    numbytes = len(data)

    if numbytes == 0:
        return " <empty packet>"

    output = ""
    for i in range(numbytes):
        if (i % bpr) == 0:
            output += f" {i:04d} :"
        output += f" {data[i]:02X}"
        if ((i + 1) % bpr) == 0:
            output += "\n"

    if (numbytes % bpr) != 0:
        output += "\n"

    return output


def _option_code(code):
    try:
        return DHCPOption(code)
    except ValueError:
        return code


def _format_option(code, value: bytes) -> str:
    if code is DHCPOption.DHCP_MSG_TYPE and len(value) == 1:
        try:
            return DHCPMessageType(value[0]).name
        except ValueError:
            return str(value[0])
    elif code in (DHCPOption.SUBNET_MASK, DHCPOption.ADDRESS_REQUEST,
                  DHCPOption.SERVER_ID, DHCPOption.NAME_SERVER,
                  DHCPOption.DOMAIN_NAME_SERVER) and value and len(value) % 4 == 0:
        return ', '.join(
            bytes_to_ip(value[i:i + 4]) for i in range(0, len(value), 4))
    elif code in (DHCPOption.TIME_OFFSET, DHCPOption.IP_LEASE_TIME,
                  DHCPOption.RENEWAL_TIME,
                  DHCPOption.REBINDING_TIME) and len(value) == 4:
        return str(unpack('<I', value)[0])
    elif code is DHCPOption.DEFAULT_IP_TTL and len(value) == 1:
        return str(value[0])
    elif code in (DHCPOption.HOSTNAME, DHCPOption.DOMAIN_NAME):
        return repr(value.decode('utf-8', errors='replace'))
    return f"({len(value):2d}) {base64.b16encode(value).decode()}"


class DHCPPacket():
    """
    A DHCP message held in a single growable buffer.

    The header fields are exposed as properties that read and write their
    fixed byte range in place. Options are appended in front of the END byte
    with :meth:`add_option` and the packet is finished with
    :meth:`pad_to_min_size`.
    """

    def __init__(self, op: OpCode = OpCode.BOOTREPLY):
        self.data = bytearray(HEADER_SIZE)
        self.op = op
        self.htype = 1  # Ethernet
        self.cookie = MAGIC_COOKIE
        self.data[HEADER_SIZE - 1] = DHCPOption.END.value

    def _get(self, offset: int, size: int) -> bytes:
        return bytes(self.data[offset:offset + size])

    def _put(self, offset: int, size: int, value: bytes):
        value = bytes(value)[:size]
        self.data[offset:offset + len(value)] = value

    @property
    def op(self) -> OpCode:
        return OpCode(self.data[0])

    @op.setter
    def op(self, op):
        self.data[0] = OpCode(op).value

    @property
    def htype(self) -> int:
        return self.data[1]

    @htype.setter
    def htype(self, htype: int):
        self.data[1] = htype

    @property
    def hlen(self) -> int:
        return self.data[2]

    @property
    def hops(self) -> int:
        return self.data[3]

    @hops.setter
    def hops(self, hops: int):
        self.data[3] = hops

    @property
    def xid(self) -> bytes:
        return self._get(4, 4)

    @xid.setter
    def xid(self, xid: bytes):
        self._put(4, 4, xid)

    @property
    def secs(self) -> bytes:
        return self._get(8, 2)

    @secs.setter
    def secs(self, secs: bytes):
        self._put(8, 2, secs)

    @property
    def flags(self) -> bytes:
        return self._get(10, 2)

    @flags.setter
    def flags(self, flags: bytes):
        self._put(10, 2, flags)

    @property
    def ciaddr(self) -> str:
        return bytes_to_ip(self._get(12, 4))

    @ciaddr.setter
    def ciaddr(self, ip):
        self._put(12, 4, ip_to_bytes(ip))

    @property
    def yiaddr(self) -> str:
        return bytes_to_ip(self._get(16, 4))

    @yiaddr.setter
    def yiaddr(self, ip):
        self._put(16, 4, ip_to_bytes(ip))

    @property
    def siaddr(self) -> str:
        return bytes_to_ip(self._get(20, 4))

    @siaddr.setter
    def siaddr(self, ip):
        self._put(20, 4, ip_to_bytes(ip))

    @property
    def giaddr(self) -> str:
        return bytes_to_ip(self._get(24, 4))

    @giaddr.setter
    def giaddr(self, ip):
        self._put(24, 4, ip_to_bytes(ip))

    @property
    def chaddr(self) -> str:
        return mac_ntoa(self._get(28, min(self.hlen, CHADDR_SIZE)))

    @chaddr.setter
    def chaddr(self, mac):
        if isinstance(mac, str):
            mac = mac_aton(mac)
        mac = bytes(mac)[:CHADDR_SIZE]
        self._put(28, CHADDR_SIZE, mac)
        self.data[2] = len(mac)

    @property
    def sname(self) -> str:
        return self._get(44, 64).split(b'\0', 1)[0].decode('utf-8', 'replace')

    @property
    def file(self) -> str:
        return self._get(108, 128).split(b'\0', 1)[0].decode('utf-8', 'replace')

    @property
    def cookie(self) -> bytes:
        return self._get(236, 4)

    @cookie.setter
    def cookie(self, cookie: bytes):
        self._put(236, 4, cookie)

    def add_option(self, code, value: bytes):
        """
        Insert ``(code, len(value), value)`` right before the END byte.

        Values longer than 255 bytes cannot be length-prefixed with one byte
        and raise ``ValueError``.
        """
        code = _option_code(code)
        value = bytes(value)
        if len(value) > MAX_OPTION_SIZE:
            raise ValueError(f"Option {code} value is {len(value)} bytes, "
                             f"at most {MAX_OPTION_SIZE} allowed.")
        num = code.value if isinstance(code, DHCPOption) else code
        del self.data[-1]
        self.data += bytes([num, len(value)])
        self.data += value
        self.data.append(DHCPOption.END.value)

    def pad_to_min_size(self):
        if (n := len(self.data)) < MIN_PACKET_SIZE:
            self.data += bytes(MIN_PACKET_SIZE - n)

    def options(self) -> list[Option]:
        ret = []
        data = self.data
        offset = HEADER_SIZE - 1
        while offset < len(data):
            code = data[offset]
            offset += 1
            if code == DHCPOption.PAD.value:
                continue
            elif code == DHCPOption.END.value:
                break
            if offset >= len(data):
                raise ValueError("Invalid option length")
            optlen = data[offset]
            offset += 1
            if offset + optlen > len(data):
                raise ValueError("Invalid option length")
            ret.append(
                Option(_option_code(code), bytes(data[offset:offset + optlen])))
            offset += optlen
        return ret

    def get_option(self, code) -> bytes | None:
        code = _option_code(code)
        for opt in self.options():
            if opt.code == code:
                return opt.value
        return None

    def encode(self) -> bytes:
        return bytes(self.data)

    @classmethod
    def decode(cls, data: bytes):
        if len(data) < HEADER_SIZE - 1:
            raise ValueError("Not enough data to decode")
        if bytes(data[236:240]) != MAGIC_COOKIE:
            raise ValueError("Invalid message")

        packet = cls.__new__(cls)
        packet.data = bytearray(data)
        return packet

    def __bytes__(self):
        return self.encode()

    def __len__(self):
        return len(self.data)

    def __str__(self):
        DHCP_ops = {1: 'BOOTREQUEST', 2: 'BOOTREPLY'}

        lines = [
            "###################### Header fields ######################",
            f"                      op : {DHCP_ops.get(self.data[0], 'ERROR_UNDEF')}",
            f"                   htype : {self.htype}",
            f"                    hlen : {self.hlen}",
            f"                    hops : {self.hops}",
            f"                     xid : 0x{int.from_bytes(self.xid, 'little'):08x}",
            f"                    secs : {int.from_bytes(self.secs, 'little')}",
            f"                   flags : {int.from_bytes(self.flags, 'little')}",
            f"       Client IP address : {self.ciaddr}",
            f"         Your IP address : {self.yiaddr}",
            f"       Server IP address : {self.siaddr}",
            f"      Gateway IP address : {self.giaddr}",
            f" Client hardware address : {self.chaddr}",
            "##################### Options fields ######################"
        ]
        for code, value in self.options():
            if isinstance(code, DHCPOption):
                name, num = code.name, code.value
            else:
                name, num = 'UNKNOWN', code
            lines.append(
                f"    {name:29s} ({num:3d}) : {_format_option(code, value)}")

        lines.append(
            "######################## Raw data #########################")
        lines.append(readable_packet(self.data))
        lines.append(
            "###########################################################")
        return '\n'.join(lines)
