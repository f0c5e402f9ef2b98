import pytest

from rpe.config import AckConfig
from rpe.exceptions import ConfigurationError, EncodingError
from rpe.net.dhcp import (DHCPMessageType, DHCPOption, DHCPPacket, OpCode,
                          Option)
from rpe.net.locator import current_ipv4_address
from rpe.net.options import build_options
from rpe.net.reply import create_reply_packet


def test_create_reply_packet(mkenumerator):
    tstassignip = "10.20.30.131"
    config = AckConfig('test.com')

    server_ip = current_ipv4_address(mkenumerator())
    options = build_options(config)

    p = create_reply_packet(config, DHCPMessageType.ACK, server_ip,
                            tstassignip, options)

    assert p.op == OpCode.BOOTREPLY
    assert p.htype == 1  # ethernet
    assert p.hlen == 6  # length of MAC
    assert p.hops == 0
    assert p.xid == bytes([68, 149, 158, 0])  # transaction id 10392900
    assert p.secs == bytes([0, 0])
    assert p.flags == bytes([0, 128])  # flag value of 32768
    assert p.ciaddr == "0.0.0.0"
    assert p.yiaddr == tstassignip
    assert p.siaddr == "0.0.0.0"
    assert p.giaddr == "0.0.0.0"
    assert p.chaddr == "54:b2:03:89:d3:b9"
    assert p.cookie == bytes([99, 130, 83, 99])
    assert len(p) >= 272


def test_reply_options():
    config = AckConfig('test.com')
    options = build_options(config)

    p = create_reply_packet(config, DHCPMessageType.ACK, '10.20.30.34',
                            config.assigned_ip, options)

    assert p.options() == [
        Option(DHCPOption.DHCP_MSG_TYPE, bytes([5])),
        Option(DHCPOption.SERVER_ID, bytes([10, 20, 30, 34])),
    ] + options
    # 240 header bytes, 58 option bytes and END, no padding needed
    assert len(p) == 299
    assert p.data[-1] == 255
    assert p.yiaddr == '169.254.214.131'


def test_reply_is_padded():
    config = AckConfig('')
    p = create_reply_packet(config, DHCPMessageType.ACK, '10.0.0.1',
                            config.assigned_ip, [])

    assert len(p) == 272
    assert bytes(p.data[240:250]) == bytes([53, 1, 5, 54, 4, 10, 0, 0, 1, 255])
    assert DHCPPacket.decode(p.encode()).options() == p.options()


def test_reply_bad_mac():
    config = AckConfig('test.com', client_mac='54-B2-03-89-D3')

    with pytest.raises(ConfigurationError):
        create_reply_packet(config, DHCPMessageType.ACK, '10.0.0.1',
                            config.assigned_ip, build_options(config))


def test_reply_bad_address():
    config = AckConfig('test.com')

    with pytest.raises(ConfigurationError):
        create_reply_packet(config, DHCPMessageType.ACK, 'localhost',
                            config.assigned_ip, [])
    with pytest.raises(ConfigurationError):
        create_reply_packet(config, DHCPMessageType.ACK, '10.0.0.1',
                            '169.254.214', [])


def test_reply_encoding_failure(monkeypatch):
    config = AckConfig('test.com')
    monkeypatch.setattr('rpe.net.reply.int_to_bytes', lambda num, width: None)

    with pytest.raises(EncodingError, match='transaction'):
        create_reply_packet(config, DHCPMessageType.ACK, '10.0.0.1',
                            config.assigned_ip, [])
