# Integer codes shared by the Numba kernels (keep ints for JIT friendliness)

# explicit matrix layouts
LAYOUT_FULL_MATRIX    = 0
LAYOUT_UPPER_ROW      = 1
LAYOUT_LOWER_ROW      = 2
LAYOUT_UPPER_DIAG_ROW = 3
LAYOUT_LOWER_DIAG_ROW = 4
LAYOUT_UPPER_COL      = 5
LAYOUT_LOWER_COL      = 6
LAYOUT_UPPER_DIAG_COL = 7
LAYOUT_LOWER_DIAG_COL = 8

# distance functions
METRIC_EUC_2D  = 0
METRIC_EUC_3D  = 1
METRIC_MAX_2D  = 2
METRIC_MAX_3D  = 3
METRIC_MAN_2D  = 4
METRIC_MAN_3D  = 5
METRIC_CEIL_2D = 6
METRIC_GEO     = 7
METRIC_ATT     = 8
METRIC_XRAY1   = 9
METRIC_XRAY2   = 10

# GEO constants from the reference TSPLIB routine
GEO_PI     = 3.141592
GEO_RADIUS = 6378.388

# list terminator used by depot, edge, fixed edge and tour sections
SENTINEL = -1
