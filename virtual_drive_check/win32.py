"""Thin ctypes wrappers over the Win32 calls the checks need. Windows only."""
import ctypes
import os
from typing import Tuple

if os.name == 'nt':
    from ctypes import wintypes

    kernel32 = ctypes.WinDLL('kernel32', use_last_error=True)
    advapi32 = ctypes.WinDLL('advapi32', use_last_error=True)

    kernel32.GetFileAttributesW.argtypes = [wintypes.LPCWSTR]
    kernel32.GetFileAttributesW.restype = wintypes.DWORD
    kernel32.SetFileAttributesW.argtypes = [wintypes.LPCWSTR, wintypes.DWORD]
    kernel32.SetFileAttributesW.restype = wintypes.BOOL
    kernel32.GetVolumePathNameW.argtypes = [wintypes.LPCWSTR, wintypes.LPWSTR, wintypes.DWORD]
    kernel32.GetVolumePathNameW.restype = wintypes.BOOL
    kernel32.GetVolumeInformationW.argtypes = [
        wintypes.LPCWSTR, wintypes.LPWSTR, wintypes.DWORD, ctypes.POINTER(wintypes.DWORD),
        ctypes.POINTER(wintypes.DWORD), ctypes.POINTER(wintypes.DWORD), wintypes.LPWSTR, wintypes.DWORD]
    kernel32.GetVolumeInformationW.restype = wintypes.BOOL
    kernel32.GetDiskFreeSpaceW.argtypes = [wintypes.LPCWSTR] + [ctypes.POINTER(wintypes.DWORD)] * 4
    kernel32.GetDiskFreeSpaceW.restype = wintypes.BOOL
    kernel32.GetDiskFreeSpaceExW.argtypes = [wintypes.LPCWSTR] + [ctypes.POINTER(ctypes.c_ulonglong)] * 3
    kernel32.GetDiskFreeSpaceExW.restype = wintypes.BOOL
    kernel32.LocalFree.argtypes = [ctypes.c_void_p]
    kernel32.LocalFree.restype = ctypes.c_void_p
    advapi32.GetNamedSecurityInfoW.argtypes = [
        wintypes.LPCWSTR, ctypes.c_int, wintypes.DWORD] + [ctypes.POINTER(ctypes.c_void_p)] * 5
    advapi32.GetNamedSecurityInfoW.restype = wintypes.DWORD
    advapi32.LookupAccountSidW.argtypes = [
        wintypes.LPCWSTR, ctypes.c_void_p, wintypes.LPWSTR, ctypes.POINTER(wintypes.DWORD),
        wintypes.LPWSTR, ctypes.POINTER(wintypes.DWORD), ctypes.POINTER(wintypes.DWORD)]
    advapi32.LookupAccountSidW.restype = wintypes.BOOL
    advapi32.LookupAccountNameW.argtypes = [
        wintypes.LPCWSTR, wintypes.LPCWSTR, ctypes.c_void_p, ctypes.POINTER(wintypes.DWORD),
        wintypes.LPWSTR, ctypes.POINTER(wintypes.DWORD), ctypes.POINTER(wintypes.DWORD)]
    advapi32.LookupAccountNameW.restype = wintypes.BOOL
    advapi32.SetNamedSecurityInfoW.argtypes = [
        wintypes.LPWSTR, ctypes.c_int, wintypes.DWORD] + [ctypes.c_void_p] * 4
    advapi32.SetNamedSecurityInfoW.restype = wintypes.DWORD

INVALID_FILE_ATTRIBUTES = 0xFFFFFFFF
FILE_ATTRIBUTE_HIDDEN = 0x2
SE_FILE_OBJECT = 1
OWNER_SECURITY_INFORMATION = 0x1
MAX_PATH = 260


def _last_error(path: str) -> OSError:
    error = ctypes.get_last_error()
    return OSError(0, ctypes.FormatError(error), path, error)


def get_file_attributes(path: str) -> int:
    attributes = kernel32.GetFileAttributesW(path)
    if attributes == INVALID_FILE_ATTRIBUTES:
        raise _last_error(path)
    return attributes


def set_file_attributes(path: str, attributes: int) -> None:
    if not kernel32.SetFileAttributesW(path, attributes):
        raise _last_error(path)


def volume_path_name(path: str) -> str:
    """Mount point of the volume holding `path`, e.g. `C:\\`."""
    buffer = ctypes.create_unicode_buffer(MAX_PATH)
    if not kernel32.GetVolumePathNameW(path, buffer, MAX_PATH):
        raise _last_error(path)
    return buffer.value


def volume_information(root: str) -> Tuple[str, str]:
    """Volume label and file system name (e.g. `NTFS`) of a volume root."""
    label = ctypes.create_unicode_buffer(MAX_PATH + 1)
    fs_name = ctypes.create_unicode_buffer(MAX_PATH + 1)
    if not kernel32.GetVolumeInformationW(root, label, MAX_PATH + 1, None, None, None, fs_name, MAX_PATH + 1):
        raise _last_error(root)
    return label.value, fs_name.value


def bytes_per_sector(root: str) -> int:
    sectors_per_cluster = wintypes.DWORD()
    sector_size = wintypes.DWORD()
    free_clusters = wintypes.DWORD()
    total_clusters = wintypes.DWORD()
    if not kernel32.GetDiskFreeSpaceW(root, ctypes.byref(sectors_per_cluster), ctypes.byref(sector_size),
                                      ctypes.byref(free_clusters), ctypes.byref(total_clusters)):
        raise _last_error(root)
    return sector_size.value


def total_free_bytes(path: str) -> int:
    available = ctypes.c_ulonglong()
    total = ctypes.c_ulonglong()
    total_free = ctypes.c_ulonglong()
    if not kernel32.GetDiskFreeSpaceExW(path, ctypes.byref(available), ctypes.byref(total), ctypes.byref(total_free)):
        raise _last_error(path)
    return total_free.value


def get_owner(path: str) -> str:
    """Owner of `path` as `DOMAIN\\name`, read from its security descriptor."""
    owner_sid = ctypes.c_void_p()
    descriptor = ctypes.c_void_p()
    error = advapi32.GetNamedSecurityInfoW(path, SE_FILE_OBJECT, OWNER_SECURITY_INFORMATION,
                                           ctypes.byref(owner_sid), None, None, None, ctypes.byref(descriptor))
    if error != 0:
        raise OSError(0, ctypes.FormatError(error), path, error)
    try:
        name_size = wintypes.DWORD(0)
        domain_size = wintypes.DWORD(0)
        name_use = wintypes.DWORD()
        # First call only reports the buffer sizes
        advapi32.LookupAccountSidW(None, owner_sid, None, ctypes.byref(name_size),
                                   None, ctypes.byref(domain_size), ctypes.byref(name_use))
        name = ctypes.create_unicode_buffer(name_size.value)
        domain = ctypes.create_unicode_buffer(domain_size.value)
        if not advapi32.LookupAccountSidW(None, owner_sid, name, ctypes.byref(name_size),
                                          domain, ctypes.byref(domain_size), ctypes.byref(name_use)):
            raise _last_error(path)
        return f'{domain.value}\\{name.value}'
    finally:
        kernel32.LocalFree(descriptor)


def set_owner(path: str, owner: str) -> None:
    """Write `owner` (`DOMAIN\\name`) into the security descriptor of `path`."""
    sid_size = wintypes.DWORD(0)
    domain_size = wintypes.DWORD(0)
    name_use = wintypes.DWORD()
    # First call only reports the buffer sizes
    advapi32.LookupAccountNameW(None, owner, None, ctypes.byref(sid_size),
                                None, ctypes.byref(domain_size), ctypes.byref(name_use))
    sid = ctypes.create_string_buffer(sid_size.value)
    domain = ctypes.create_unicode_buffer(domain_size.value)
    if not advapi32.LookupAccountNameW(None, owner, sid, ctypes.byref(sid_size),
                                       domain, ctypes.byref(domain_size), ctypes.byref(name_use)):
        raise _last_error(path)
    error = advapi32.SetNamedSecurityInfoW(path, SE_FILE_OBJECT, OWNER_SECURITY_INFORMATION,
                                           ctypes.addressof(sid), None, None, None)
    if error != 0:
        raise OSError(0, ctypes.FormatError(error), path, error)
