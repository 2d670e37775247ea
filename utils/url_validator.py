"""
SSRF Protection Module

Recipe imports fetch arbitrary user-supplied URLs, so every request
(and every redirect hop) is checked first: only http(s), and never a
host that is or resolves to a loopback, private or otherwise internal
address. Response bodies are read with a size cap.
"""

import ipaddress
import logging
import socket
from urllib.parse import urljoin, urlparse

import requests

from .errors import UnreachableResourceError

logger = logging.getLogger(__name__)

BLOCKED_HOSTNAMES = {'localhost', 'localhost.localdomain'}
MAX_REDIRECTS = 5
CHUNK_SIZE = 8192


class SSRFError(Exception):
    """Raised when a URL fails SSRF validation or a response is too large."""
    pass


def is_private_ip(ip_str):
    """True for loopback, private, link-local and other non-public addresses."""
    try:
        ip = ipaddress.ip_address(ip_str)
    except ValueError:
        return True  # unparseable counts as unsafe
    return (ip.is_private or ip.is_loopback or ip.is_reserved or
            ip.is_link_local or ip.is_multicast or ip.is_unspecified)


def _resolved_addresses(hostname):
    try:
        infos = socket.getaddrinfo(hostname, None, socket.AF_UNSPEC, socket.SOCK_STREAM)
    except socket.gaierror:
        raise UnreachableResourceError(f"Cannot resolve hostname: {hostname}")
    return [sockaddr[0] for _family, _type, _proto, _canon, sockaddr in infos]


def is_safe_url(url):
    """
    Check that a URL may be fetched.

    Returns:
        (True, None) or (False, reason)

    Raises:
        UnreachableResourceError: the hostname does not resolve
    """
    if not url:
        return False, "Empty URL"

    try:
        parsed = urlparse(url)
    except ValueError:
        return False, "Invalid URL format"

    if parsed.scheme not in ('http', 'https'):
        return False, f"Invalid scheme: {parsed.scheme}. Only http and https are allowed."

    hostname = parsed.hostname
    if not hostname:
        return False, "No hostname in URL"
    if hostname.lower() in BLOCKED_HOSTNAMES:
        return False, "Cannot access localhost"

    try:
        literal = ipaddress.ip_address(hostname)
    except ValueError:
        literal = None
    if literal is not None:
        if is_private_ip(str(literal)):
            return False, f"Cannot access private/internal IP: {hostname}"
        return True, None

    for address in _resolved_addresses(hostname):
        if is_private_ip(address):
            return False, f"Hostname resolves to private/internal IP: {address}"
    return True, None


def _check_url(url):
    ok, reason = is_safe_url(url)
    if not ok:
        logger.warning("Blocked fetch of %s: %s", url, reason)
        raise SSRFError(reason)


def _read_limited(response, max_size):
    declared = response.headers.get('content-length')
    if declared and declared.isdigit() and int(declared) > max_size:
        response.close()
        raise SSRFError(f"Response too large: {declared} bytes (max {max_size})")

    body = bytearray()
    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
        body.extend(chunk)
        if len(body) > max_size:
            response.close()
            raise SSRFError(f"Response exceeded maximum size of {max_size} bytes")
    return bytes(body)


def safe_fetch(url, headers=None, timeout=10, max_size=10 * 1024 * 1024,
               max_redirects=MAX_REDIRECTS):
    """
    GET a URL with SSRF checks on every hop and a body size limit.

    Redirects are followed by hand so each Location is validated before
    it is requested.

    Returns:
        requests.Response with its content fully read

    Raises:
        SSRFError: a hop failed validation or the body is over max_size
        UnreachableResourceError: a hostname does not resolve
        requests.RequestException: network errors, HTTP error statuses
            and too many redirects
    """
    for _hop in range(max_redirects + 1):
        _check_url(url)
        response = requests.get(url, headers=headers, timeout=timeout,
                                stream=True, allow_redirects=False)
        if not response.is_redirect:
            break
        location = (response.headers.get('location') or '').strip()
        response.close()
        if not location:
            raise requests.RequestException(f"Redirect from {url} has no Location header")
        url = urljoin(url, location)
        logger.debug("Following redirect to %s", url)
    else:
        raise requests.TooManyRedirects(f"More than {max_redirects} redirects")

    response.raise_for_status()
    response._content = _read_limited(response, max_size)
    return response
