"""Virtual machine lifecycle keywords backed by libvirt."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, Optional
from xml.etree.ElementTree import ParseError, fromstring

from vmremote.constants import DOMAIN_STATES, LIBVIRT_URI
from vmremote.exceptions import RemoteServerError
from vmremote.utils import log


def _libvirt():
    try:
        import libvirt  # type: ignore
    except ImportError as exc:
        raise RemoteServerError(f"libvirt python bindings not available: {exc}") from exc
    return libvirt


def _creation_time(snapshot) -> int:
    try:
        text = fromstring(snapshot.getXMLDesc(0)).findtext("creationTime", "")
    except ParseError:
        return 0
    return int(text) if text.strip().isdigit() else 0


class VirtualMachineLibrary:
    """Start, stop, reset, revert and inspect libvirt virtual machines.

    Every keyword opens its own hypervisor connection and closes it before
    returning, so an instance holds no state between keywords.
    """

    def __init__(self, uri: Optional[str] = None) -> None:
        self.uri = uri or LIBVIRT_URI
        self._virt = _libvirt()

    @contextmanager
    def _connection(self) -> Iterator:
        conn = self._virt.open(self.uri)
        if conn is None:
            raise RemoteServerError(f"Failed to connect to hypervisor at {self.uri}")
        try:
            yield conn
        finally:
            conn.close()

    def _lookup(self, conn, name: str):
        try:
            return conn.lookupByName(name)
        except self._virt.libvirtError:
            raise RemoteServerError(f"The virtual machine '{name}' could not be found.") from None

    def _change_state(self, name: str, action: Callable, label: str) -> bool:
        with self._connection() as conn:
            domain = self._lookup(conn, name)
            try:
                rc = action(domain)
            except self._virt.libvirtError as exc:
                log("WARN", f"Failed to {label} {name}: {exc}")
                return False
        if rc != 0:
            log("WARN", f"Failed to {label} {name}, with error {rc}")
            return False
        log("INFO", f"{label.capitalize()} of {name} succeeded")
        return True

    def start_virtual_machine(self, name: str) -> bool:
        """Start a defined virtual machine. Allow time for the guest to boot."""
        return self._change_state(name, lambda domain: domain.create(), "start")

    def stop_virtual_machine(self, name: str) -> bool:
        """Power off a virtual machine. This is a forced shutdown; use it as a last resort."""
        return self._change_state(name, lambda domain: domain.destroy(), "stop")

    def hard_reset_virtual_machine(self, name: str) -> bool:
        """Reset a virtual machine without a guest shutdown."""
        return self._change_state(name, lambda domain: domain.reset(0), "hard reset")

    def revert_to_last_snapshot(self, vm_name: str) -> bool:
        """Revert a virtual machine, running or not, to its last snapshot."""
        with self._connection() as conn:
            domain = self._lookup(conn, vm_name)
            snapshot = self._last_snapshot(domain, vm_name)
            try:
                rc = domain.revertToSnapshot(snapshot, 0)
            except self._virt.libvirtError as exc:
                log("WARN", f"Failed to revert {vm_name} back to last snapshot: {exc}")
                return False
        if rc != 0:
            log("WARN", f"Failed to revert {vm_name} back to last snapshot, with error {rc}")
            return False
        log("INFO", f"Reverted {vm_name} back to snapshot {snapshot.getName()}")
        return True

    def _last_snapshot(self, domain, vm_name: str):
        if domain.hasCurrentSnapshot(0):
            return domain.snapshotCurrent(0)
        snapshots = domain.listAllSnapshots(0)
        if not snapshots:
            raise RemoteServerError(f"The virtual machine '{vm_name}' has no snapshots.")
        return max(snapshots, key=_creation_time)

    def get_virtual_machine_information(self, name: str) -> str:
        """Summarise a virtual machine: name, guest OS, notes, state, memory and CPU usage."""
        with self._connection() as conn:
            domain = self._lookup(conn, name)
            try:
                state, max_memory, memory, vcpus, cpu_time = domain.info()
            except self._virt.libvirtError as exc:
                log("WARN", f"Failed to retrieve info for {name}: {exc}")
                return "Failed to retrieve VM info.\n"
            try:
                os_type = domain.OSType()
            except self._virt.libvirtError:
                os_type = "unknown"
            try:
                notes = domain.metadata(self._virt.VIR_DOMAIN_METADATA_DESCRIPTION, None, 0)
            except self._virt.libvirtError:
                notes = ""  # no <description> set

            lines = [
                f"VM name: {domain.name()}",
                f"VM guest OS: {os_type}",
                f"VM notes: {notes}",
                f"VM state: {DOMAIN_STATES.get(state, f'unknown ({state})')}",
                f"VM memory usage: {memory // 1024} MiB of {max_memory // 1024} MiB",
                f"VM vCPUs: {vcpus}",
                f"VM CPU time: {cpu_time / 1e9:.1f}s",
            ]
        return "".join(f"{line}\n" for line in lines)
