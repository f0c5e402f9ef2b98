from .ack import send_ack
from .config import AckConfig
from .exceptions import (ConfigurationError, DiscoveryError, EncodingError,
                         NoAddressError, NoInterfaceError, RPEError,
                         TransportError)
from .net.dhcp import DHCPMessageType, DHCPOption, DHCPPacket, OpCode, Option
from .version import __version__
