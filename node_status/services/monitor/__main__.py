"""Module entrypoint for running the monitor service."""

from node_status.services.monitor.main import main

if __name__ == "__main__":
    raise SystemExit(main())
