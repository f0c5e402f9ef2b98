from ..config import AckConfig
from ..exceptions import ConfigurationError, EncodingError
from .dhcp import (MAX_OPTION_SIZE, DHCPOption, Option, int_to_bytes,
                   ip_to_bytes)


def add_dhcp_option(options: list[Option], code: DHCPOption, value: bytes):
    options.append(Option(code, bytes(value)))


def _encode_int(code: DHCPOption, num: int, width: int = 4) -> bytes:
    value = int_to_bytes(num, width)
    if value is None:
        raise EncodingError(f"invalid {code.name} value {num!r}")
    return value


def _encode_ip(code: DHCPOption, ip: str) -> bytes:
    try:
        return ip_to_bytes(ip)
    except ValueError as e:
        raise ConfigurationError(f"invalid {code.name} address: {e}") from e


def _encode_byte(code: DHCPOption, num: int) -> bytes:
    if not 0 <= num <= 0xff:
        raise EncodingError(f"invalid {code.name} value {num!r}")
    return bytes([num])


def build_options(config: AckConfig) -> list[Option]:
    """
    Build the configuration options carried by the ACK, in wire order.

    subnet mask, time offset, DNS server, domain name, default TTL, lease
    time, renewal time, rebinding time.
    """
    opts = []
    add_dhcp_option(opts, DHCPOption.SUBNET_MASK,
                    _encode_ip(DHCPOption.SUBNET_MASK, config.subnet_mask))
    add_dhcp_option(opts, DHCPOption.TIME_OFFSET,
                    _encode_int(DHCPOption.TIME_OFFSET, config.time_offset))
    add_dhcp_option(
        opts, DHCPOption.DOMAIN_NAME_SERVER,
        _encode_ip(DHCPOption.DOMAIN_NAME_SERVER, config.dns_server))
    domain = config.dns_suffix.encode('utf-8')
    if len(domain) > MAX_OPTION_SIZE:
        raise ConfigurationError(
            f"DNS suffix is {len(domain)} bytes, at most {MAX_OPTION_SIZE}")
    add_dhcp_option(opts, DHCPOption.DOMAIN_NAME, domain)
    add_dhcp_option(opts, DHCPOption.DEFAULT_IP_TTL,
                    _encode_byte(DHCPOption.DEFAULT_IP_TTL, config.default_ttl))
    add_dhcp_option(opts, DHCPOption.IP_LEASE_TIME,
                    _encode_int(DHCPOption.IP_LEASE_TIME, config.lease_time))
    add_dhcp_option(opts, DHCPOption.RENEWAL_TIME,
                    _encode_int(DHCPOption.RENEWAL_TIME, config.renewal_time))
    add_dhcp_option(
        opts, DHCPOption.REBINDING_TIME,
        _encode_int(DHCPOption.REBINDING_TIME, config.rebinding_time))
    return opts
