"""Search page controller for the ConnectAPI directory."""
