import ipaddress
from abc import ABC, abstractmethod

from loguru import logger

from ..config import WIRED_INTERFACES
from ..exceptions import DiscoveryError, NoAddressError, NoInterfaceError


class NetworkEnumerator(ABC):
    """
    Source of network interfaces and their addresses.
    """

    @abstractmethod
    def list_interfaces(self) -> list[str]:
        """
        Return the names of all network interfaces.
        """

    @abstractmethod
    def addresses_of(self, name: str) -> list[str]:
        """
        Return the addresses of interface ``name`` in CIDR notation,
        e.g. ``10.20.30.34/24`` or ``fe80::1/64``.
        """


class NetifacesEnumerator(NetworkEnumerator):

    def list_interfaces(self) -> list[str]:
        import netifaces

        return list(netifaces.interfaces())

    def addresses_of(self, name: str) -> list[str]:
        import netifaces

        ifinfo = netifaces.ifaddresses(name)
        addrs = []
        for inetinfo in ifinfo.get(netifaces.AF_INET, []):
            if mask := inetinfo.get('netmask'):
                addrs.append(
                    str(ipaddress.ip_interface(f"{inetinfo['addr']}/{mask}")))
            else:
                addrs.append(inetinfo['addr'])
        for inetinfo in ifinfo.get(netifaces.AF_INET6, []):
            # link-local entries carry a scope suffix: fe80::1%eth0
            addr = inetinfo['addr'].split('%')[0]
            mask = inetinfo.get('netmask', '')
            if '/' in mask:
                addr = f"{addr}/{mask.split('/')[-1]}"
            addrs.append(addr)
        return addrs


def current_ipv4_address(enumerator: NetworkEnumerator | None = None,
                         wired=WIRED_INTERFACES) -> str:
    """
    Find the IPv4 address of the wired network interface.

    The first interface whose name is in ``wired`` is used, and its first
    IPv4 address is returned without the prefix length.

    Raises:
        DiscoveryError: the interfaces could not be listed.
        NoAddressError: the wired interface has no IPv4 address.
        NoInterfaceError: no interface name is in ``wired``.
    """
    if enumerator is None:
        enumerator = NetifacesEnumerator()

    try:
        names = enumerator.list_interfaces()
    except (OSError, ValueError) as e:
        logger.error(f"Failed getting network interfaces: {e}")
        raise DiscoveryError(f"failed getting network interfaces: {e}") from e

    for name in names:
        if name not in wired:
            continue
        try:
            addrs = enumerator.addresses_of(name)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed getting addresses of {name!r}: {e}")
            continue
        for addr in addrs:
            try:
                iface = ipaddress.ip_interface(addr.strip())
            except ValueError:
                logger.warning(f"Skipping unparsable address {addr!r} "
                               f"on {name!r}")
                continue
            if iface.version != 4:
                continue
            logger.debug(f"Using address {iface.ip} of interface {name!r}")
            return str(iface.ip)
        raise NoAddressError(f"no IPv4 address found on {name!r}")

    raise NoInterfaceError(
        f"no wired interface found, looked for {', '.join(wired)}")


def broadcast_address_for(address: str) -> str:
    """
    Broadcast address of ``address`` assuming a /24 network.
    """
    net = ipaddress.ip_network(f"{address}/24", strict=False)
    return str(net.broadcast_address)
