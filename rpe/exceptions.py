class RPEError(Exception):
    """
    Base exception.
    """


###############################################################
# Configuration Exceptions
###############################################################


class ConfigurationError(RPEError):
    """
    A fixed configuration value could not be used to build the packet.
    """


class EncodingError(ConfigurationError):
    """
    An integer could not be encoded with the requested byte width.
    """


###############################################################
# Discovery Exceptions
###############################################################


class DiscoveryError(RPEError):
    """
    Network interfaces could not be enumerated.
    """


class NoInterfaceError(DiscoveryError):
    """
    None of the wired interfaces is present.
    """


class NoAddressError(DiscoveryError):
    """
    The wired interface has no IPv4 address.
    """


###############################################################
# Transport Exceptions
###############################################################


class TransportError(RPEError):
    """
    Socket open, write or close failed.
    """
