"""Terminal collaborators: key decoding, action resolution, ANSI, styles and streams."""
