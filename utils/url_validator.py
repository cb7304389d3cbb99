"""
SSRF Protection Module

Validates URLs before the server fetches them. Only http(s) URLs whose host
resolves to public addresses are allowed, redirects are re-validated hop by
hop, and response bodies are size-capped.
"""

import ipaddress
import re
import socket
from urllib.parse import urljoin, urlparse

import requests

from constants import PAYWALL_DOMAINS

LOCALHOST_ALIASES = {
    'localhost', 'localhost.localdomain', '127.0.0.1', '::1', '0.0.0.0',
    '[::1]', '[0:0:0:0:0:0:0:1]',
}
DEFAULT_HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36',
    'Accept': 'text/html,application/xhtml+xml',
}
MAX_REDIRECTS = 5


class SSRFError(Exception):
    """Raised when a URL fails SSRF validation."""
    status_code = 400


def is_valid_http_url(url):
    """True for absolute http:// or https:// URLs with a host."""
    if not isinstance(url, str) or not url.strip():
        return False
    parsed = urlparse(url.strip())
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)


def is_private_ip(ip_str):
    """Loopback, private, link-local, reserved and multicast addresses are internal."""
    try:
        ip = ipaddress.ip_address(ip_str)
    except ValueError:
        return True  # unparseable, treat as unsafe
    if ip.version == 6 and ip.ipv4_mapped:
        ip = ip.ipv4_mapped
    return (ip.is_private or ip.is_loopback or ip.is_link_local or ip.is_reserved
            or ip.is_multicast or ip.is_unspecified)


def is_safe_url(url):
    """
    Validate that a URL is safe to fetch.

    Returns:
        (is_safe, error_message) tuple
    """
    if not url:
        return False, "Empty URL"

    parsed = urlparse(url)
    if parsed.scheme not in ('http', 'https'):
        return False, f"Invalid scheme: {parsed.scheme}. Only http and https are allowed."

    hostname = parsed.hostname
    if not hostname:
        return False, "No hostname in URL"
    if hostname.lower() in LOCALHOST_ALIASES:
        return False, "Cannot access localhost"

    try:
        ipaddress.ip_address(hostname)
    except ValueError:
        pass
    else:
        if is_private_ip(hostname):
            return False, f"Cannot access private/internal IP: {hostname}"
        return True, None

    try:
        resolved = socket.getaddrinfo(hostname, None, socket.AF_UNSPEC, socket.SOCK_STREAM)
    except socket.gaierror:
        return False, f"Cannot resolve hostname: {hostname}"

    for _family, _type, _proto, _canon, sockaddr in resolved:
        if is_private_ip(sockaddr[0]):
            return False, f"Hostname resolves to private/internal IP: {sockaddr[0]}"
    return True, None


def safe_fetch(url, headers=None, timeout=10, max_size=10 * 1024 * 1024):
    """
    GET a URL with SSRF protection and a size limit.

    Redirects are followed manually so every hop is validated.

    Returns:
        requests.Response with its body read

    Raises:
        SSRFError: the URL (or a redirect target) is not allowed, or the body is too large
        requests.RequestException: network and HTTP errors
    """
    headers = headers or DEFAULT_HEADERS

    for _ in range(MAX_REDIRECTS + 1):
        ok, error = is_safe_url(url)
        if not ok:
            raise SSRFError(error)

        response = requests.get(url, headers=headers, timeout=timeout, stream=True,
                                allow_redirects=False)
        if response.is_redirect:
            location = response.headers.get('location')
            response.close()
            url = urljoin(url, location)
            continue
        response.raise_for_status()

        content_length = response.headers.get('content-length')
        if content_length and content_length.isdigit() and int(content_length) > max_size:
            response.close()
            raise SSRFError(f"Response too large: {content_length} bytes (max {max_size})")

        chunks, size = [], 0
        for chunk in response.iter_content(chunk_size=8192):
            size += len(chunk)
            if size > max_size:
                response.close()
                raise SSRFError(f"Response exceeded maximum size of {max_size} bytes")
            chunks.append(chunk)
        response._content = b''.join(chunks)
        return response

    raise SSRFError(f"Too many redirects (max {MAX_REDIRECTS})")


def domain_of(url):
    return (urlparse(url).hostname or '').lower()


def is_paywalled_domain(url):
    """True for recipe sites that usually sit behind a subscription."""
    host = domain_of(url)
    bare = host[4:] if host.startswith('www.') else host
    return host in PAYWALL_DOMAINS or bare in PAYWALL_DOMAINS or f"www.{bare}" in PAYWALL_DOMAINS


def name_from_url_slug(url):
    """
    Guess a recipe name from the last meaningful path segment.

    https://example.com/recipes/1234/lemon-garlic-chicken/ -> "Lemon Garlic Chicken"
    """
    segments = [s for s in urlparse(url).path.split('/') if s]
    for segment in reversed(segments):
        segment = re.sub(r'\.(html?|php|aspx?)$', '', segment, flags=re.IGNORECASE)
        words = [w for w in re.split(r'[-_+]+', segment) if w and not w.isdigit()]
        if words:
            return ' '.join(w.capitalize() for w in words)
    return None
