"""Terminal UI and command line for workbench-setup."""
