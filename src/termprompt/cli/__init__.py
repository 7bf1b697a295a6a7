"""Command line interface for termprompt."""
