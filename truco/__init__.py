"""Four-player Truco: game rules, JSON packets, TCP server with AI players, and a console client."""

__version__ = "0.1.0"