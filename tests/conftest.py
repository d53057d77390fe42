"""Test configuration and fixtures."""

import logfire

# Must run before hublink.interface.api.app is imported
logfire.configure(send_to_logfire=False, console=False)
