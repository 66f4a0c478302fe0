"""Find, download and install the latest Minecraft Bedrock dedicated server."""

__version__ = "0.1.0"