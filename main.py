"""Main entrypoint for the Replicate client: runs the command-line runner."""
from replicate_client.main import main

if __name__ == "__main__":
    raise SystemExit(main())
