# Parser option defaults (override per call with a params dict)
DEFAULTS = {
    "strict": False,                       # reject known real-world deviations instead of recovering
    "default_weight_format": "FULL_MATRIX",  # layout for EXPLICIT files without EDGE_WEIGHT_FORMAT (lenient only)
    "max_explicit_dimension": None,        # refuse explicit matrices above this dimension
    "encoding": "utf-8",                   # used for bytes and path input
}
