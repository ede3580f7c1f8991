"""Shared pytest fixtures for all tests."""

import errno
import ipaddress
import os
import socket

import pytest

from pnfscommon.constants import DEFAULT_XATTR_NAME, FHANDLE_SIZE
from pnfscommon.record import DsFileRecord, Inet4Endpoint, Inet6Endpoint, encode_record


class FakeXattrStore:
    """In-memory stand-in for os.getxattr/os.setxattr."""

    def __init__(self):
        self.values = {}
        self.writes = []
        self.write_error = None

    def put(self, path, value, name=DEFAULT_XATTR_NAME):
        self.values[(str(path), name)] = bytes(value)

    def get(self, path, name=DEFAULT_XATTR_NAME):
        return self.values[(str(path), name)]

    def getxattr(self, path, name, *, follow_symlinks=True):
        try:
            return self.values[(str(path), name)]
        except KeyError:
            raise OSError(errno.ENODATA, os.strerror(errno.ENODATA), str(path))

    def setxattr(self, path, name, value, flags=0, *, follow_symlinks=True):
        if self.write_error is not None:
            raise self.write_error
        self.values[(str(path), name)] = bytes(value)
        self.writes.append((str(path), name, bytes(value)))


@pytest.fixture
def xattr_store(monkeypatch):
    """
    Patch os.getxattr/os.setxattr with an in-memory store.

    Returns:
        FakeXattrStore instance
    """
    store = FakeXattrStore()
    monkeypatch.setattr(os, 'getxattr', store.getxattr, raising=False)
    monkeypatch.setattr(os, 'setxattr', store.setxattr, raising=False)
    return store


@pytest.fixture
def file_handle():
    """Non-zero file handle bytes."""
    return bytes(range(1, FHANDLE_SIZE + 1))


@pytest.fixture
def inet4_record(file_handle):
    """
    Record pointing at 203.0.113.5, ds2/chunk001.

    Returns:
        DsFileRecord built from fields (no raw bytes)
    """
    return DsFileRecord(
        file_handle=file_handle,
        directory_index=2,
        server=Inet4Endpoint(address=ipaddress.IPv4Address('203.0.113.5'), port=2049),
        remote_filename='chunk001',
    )


@pytest.fixture
def inet6_record(file_handle):
    """Record pointing at 2001:db8::5, ds7/chunk002."""
    return DsFileRecord(
        file_handle=file_handle,
        directory_index=7,
        server=Inet6Endpoint(address=ipaddress.IPv6Address('2001:db8::5'), port=2049, scope_id=3),
        remote_filename='chunk002',
    )


@pytest.fixture
def mds_file(tmp_path, xattr_store, inet4_record):
    """
    Create a file carrying the IPv4 record in the fake attribute store.

    Returns:
        Path to the file
    """
    path = tmp_path / 'exported.dat'
    path.write_text('metadata only')
    xattr_store.put(path, encode_record(inet4_record))
    return path


REVERSE_NAMES = {
    '203.0.113.5': 'host-203-0-113-5.example',
    '2001:db8::5': 'host-2001-db8--5.example',
}


@pytest.fixture
def reverse_dns(monkeypatch):
    """
    Patch socket.getnameinfo with a fixed address -> name table.

    Unknown addresses raise socket.gaierror.
    """
    calls = []

    def fake_getnameinfo(sockaddr, flags):
        calls.append((sockaddr, flags))
        try:
            return REVERSE_NAMES[sockaddr[0]], str(sockaddr[1])
        except KeyError:
            raise socket.gaierror(socket.EAI_NONAME, 'Name or service not known')

    monkeypatch.setattr(socket, 'getnameinfo', fake_getnameinfo)
    return calls


def _addrinfo(*hosts):
    results = []
    for host in hosts:
        ip = ipaddress.ip_address(host.split('%', 1)[0])
        if ip.version == 4:
            results.append((socket.AF_INET, socket.SOCK_STREAM, 6, '', (host, 0)))
        else:
            results.append((socket.AF_INET6, socket.SOCK_STREAM, 6, '', (host, 0, 0, 0)))
    return results


@pytest.fixture
def make_addrinfo():
    """Build getaddrinfo() style results for address literals."""
    return _addrinfo
