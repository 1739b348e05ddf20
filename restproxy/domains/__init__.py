"""Domain packages: credentials, signing schemes, proxies and calls."""
