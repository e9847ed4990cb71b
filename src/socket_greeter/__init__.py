"""Socket Greeter - A Slack bot that says hello over Socket Mode.

Keeps a Socket Mode connection open, acknowledges inbound envelopes and
answers app mentions and the /hello command with a greeting.

Components:
- main_socket: Process entry point (connection setup, shutdown, exit codes)
- dispatcher: Single consumer loop over inbound events
- shutdown: SIGINT/SIGTERM to cooperative cancellation
- slack: Socket Mode gateway, event models and Web API client
"""
