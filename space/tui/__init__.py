"""State and key handling of the interactive workspace screens."""