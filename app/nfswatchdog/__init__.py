"""nfswatchdog - Liveness watchdog for NFS mounts in Kubernetes pods."""

__version__ = "0.1.0"
