import sys

import click
from loguru import logger

from ..ack import send_ack
from ..config import WIRED_INTERFACES, AckConfig
from ..exceptions import RPEError
from ..net.dhcp import DHCPMessageType
from ..net.locator import current_ipv4_address
from ..net.options import build_options
from ..net.reply import create_reply_packet
from .config import get_config_value, log_options


def dns_suffix_option(command_name):
    return click.option(
        '--dns-suffix',
        '-d',
        default=lambda: get_config_value(
            "dns_suffix", str, command_name, default='', env_var='DNS_SUFFIX'),
        help='DNS suffix to broadcast in option 15 of DHCP '
        '(override DNS_SUFFIX env var)')


def interface_option(func):
    return click.option(
        '--interface',
        '-i',
        multiple=True,
        help='Wired interface name, may be given more than once. '
        f'Defaults to {", ".join(WIRED_INTERFACES)}.')(func)


@click.group()
def cli():
    """
    Remote Provisioning Extension (RPE) - used to set DNS Suffix for AMT on
    static IP or with out FQDN.
    """


@cli.command()
@dns_suffix_option('send')
@click.option('--port',
              '-p',
              type=int,
              default=lambda: get_config_value(
                  "port", int, 'send', default=3050, env_var='PORT'),
              help='Port to run RPE service (override PORT env var)')
@interface_option
@click.option('--timeout',
              type=float,
              default=lambda: get_config_value("timeout", float, 'send'),
              help='Socket timeout in seconds')
@log_options
def send(dns_suffix, port, interface, timeout):
    """Broadcast a DHCP ACK carrying the DNS suffix.

    Example: rpe send -p 8005 -d demo.com
    """
    if not dns_suffix:
        raise click.UsageError("-d flag is required and cannot be empty")

    logger.info(f"DNS Suffix: {dns_suffix} RPE Port: {port}")
    logger.info("Remote Provisioning Extension (RPE) starting ...")

    config = AckConfig(dns_suffix,
                       wired_interfaces=tuple(interface) or WIRED_INTERFACES,
                       timeout=timeout)
    try:
        send_ack(config)
    except RPEError as e:
        logger.error(f"Error sending Ack packet: {e}")
        sys.exit(1)


@cli.command()
@dns_suffix_option('show')
@click.option('--server-ip',
              default=None,
              help='Server identifier, defaults to the wired interface address')
@interface_option
@log_options
def show(dns_suffix, server_ip, interface):
    """Print the DHCP ACK that would be sent, without sending it."""
    config = AckConfig(dns_suffix,
                       wired_interfaces=tuple(interface) or WIRED_INTERFACES)
    try:
        if server_ip is None:
            server_ip = current_ipv4_address(wired=config.wired_interfaces)
        packet = create_reply_packet(config, DHCPMessageType.ACK, server_ip,
                                     config.assigned_ip, build_options(config))
    except RPEError as e:
        logger.error(f"Error building Ack packet: {e}")
        sys.exit(1)

    click.echo(str(packet))
