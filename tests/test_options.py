import pytest

from rpe.config import AckConfig
from rpe.exceptions import ConfigurationError, EncodingError
from rpe.net.dhcp import DHCPOption, Option
from rpe.net.options import add_dhcp_option, build_options


def test_add_dhcp_option():
    rcvd = []
    add_dhcp_option(rcvd, DHCPOption.DEFAULT_IP_TTL, [64])

    assert rcvd == [Option(DHCPOption.DEFAULT_IP_TTL, bytes([64]))]


def test_build_options():
    want = [
        Option(DHCPOption.SUBNET_MASK, bytes([255, 255, 255, 0])),
        Option(DHCPOption.TIME_OFFSET, bytes([0, 0, 0, 0])),
        Option(DHCPOption.DOMAIN_NAME_SERVER, bytes([8, 8, 8, 8])),
        Option(DHCPOption.DOMAIN_NAME, b'test.com'),
        Option(DHCPOption.DEFAULT_IP_TTL, bytes([64])),
        Option(DHCPOption.IP_LEASE_TIME, bytes([128, 81, 1, 0])),
        Option(DHCPOption.RENEWAL_TIME, bytes([192, 168, 0, 0])),
        Option(DHCPOption.REBINDING_TIME, bytes([80, 39, 1, 0])),
    ]

    assert build_options(AckConfig('test.com')) == want


def test_build_options_empty_suffix():
    opts = build_options(AckConfig(''))

    assert [opt.code for opt in opts] == [
        DHCPOption.SUBNET_MASK,
        DHCPOption.TIME_OFFSET,
        DHCPOption.DOMAIN_NAME_SERVER,
        DHCPOption.DOMAIN_NAME,
        DHCPOption.DEFAULT_IP_TTL,
        DHCPOption.IP_LEASE_TIME,
        DHCPOption.RENEWAL_TIME,
        DHCPOption.REBINDING_TIME,
    ]
    assert opts[3].value == b''


def test_build_options_utf8_suffix():
    opts = build_options(AckConfig('bücher.example'))
    assert opts[3].value == 'bücher.example'.encode('utf-8')


def test_build_options_invalid_config():
    with pytest.raises(ConfigurationError):
        build_options(AckConfig('test.com', subnet_mask='255.255.0'))
    with pytest.raises(ConfigurationError):
        build_options(AckConfig('test.com', dns_server='dns.google'))
    with pytest.raises(EncodingError):
        build_options(AckConfig('test.com', default_ttl=300))
    with pytest.raises(ConfigurationError):
        build_options(AckConfig('a' * 256))


def test_build_options_encoding_failure(monkeypatch):
    monkeypatch.setattr('rpe.net.options.int_to_bytes', lambda num, width: None)

    with pytest.raises(EncodingError, match='TIME_OFFSET'):
        build_options(AckConfig('test.com'))
