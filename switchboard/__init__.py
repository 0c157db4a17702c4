"""SwitchBoard.

Dashboard backend for a handful of docker-compose services:
 - polls a runtime status feed (one JSON container record per line)
 - maps each container to the logical service name used in config.json
 - reports one status entry per configured service
 - forwards start/stop toggles to a downstream controller

`switchboard.agent` is an optional companion that serves the status feed and
the toggle controller straight from the Docker daemon.
"""

__version__ = "0.3.0"
