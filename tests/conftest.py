import socket

import pytest

from rpe.net.locator import NetworkEnumerator

IPV4_ADDR = '10.20.30.34/24'
IPV6_ADDR = 'fe80::a853:f61a:b1b6:842/64'


class FakeEnumerator(NetworkEnumerator):

    def __init__(self, interfaces):
        self.interfaces = interfaces

    def list_interfaces(self):
        if isinstance(self.interfaces, Exception):
            raise self.interfaces
        return list(self.interfaces)

    def addresses_of(self, name):
        addrs = self.interfaces[name]
        if isinstance(addrs, Exception):
            raise addrs
        return addrs


@pytest.fixture()
def mkenumerator():

    def _mkenumerator(interfaces=None):
        """
        Make an enumerator.  One wired "Ethernet" interface if not specified.
        """
        if interfaces is None:
            interfaces = {'Ethernet': [IPV6_ADDR, IPV4_ADDR]}
        return FakeEnumerator(interfaces)

    return _mkenumerator


@pytest.fixture()
def udp_receiver():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.settimeout(2)
    sock.bind(('127.0.0.1', 0))
    try:
        yield sock
    finally:
        sock.close()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    config_path = tmp_path / 'rpe.ini'
    monkeypatch.setattr('rpe.cli.config.CONFIG_PATH', str(config_path))
    for var in ('DNS_SUFFIX', 'PORT', 'RPE_TIMEOUT', 'RPE_DEBUG', 'RPE_LOG',
                'RPE_DEBUG_LOG', 'RPE_QUIET'):
        monkeypatch.delenv(var, raising=False)
    return config_path
