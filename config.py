"""
Beacon emitter locator configuration.
"""

# HTTP server
SERVER_CONFIG = {
    "host": "0.0.0.0",        # listen on all interfaces
    "port": 8080,
    "threaded": True,         # one thread per request
}

# Fixed beacon coordinates on the plane, in canonical order
KNOWN_BEACON_CONFIG = {
    "kenobi": {"x": -500.0, "y": -200.0},
    "skywalker": {"x": 100.0, "y": -100.0},
    "sato": {"x": 500.0, "y": 100.0},
}

# Levenberg-Marquardt trilateration
SOLVER_CONFIG = {
    "max_iterations": 100,
    "convergence_tol": 1e-10,     # step norm, plane units
    "initial_damping": 1e-3,
    "min_damping": 1e-12,
    "max_damping": 1e10,
    "min_geometry_score": 0.01,   # below this a warning is logged
}

# Logging
LOGGING_CONFIG = {
    "level": "INFO",
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}
