"""Engine core: configuration, discovery, parsing and the analysis service."""
