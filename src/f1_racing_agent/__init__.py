"""F1 Racing Agent.

Priced, read-only Formula 1 data entrypoints — standings, schedules, drivers,
and race results — aggregated from the Jolpica Ergast API.
"""

__version__ = "1.0.0"
