"""Runtime type checking for the package.

``beartype`` configured with the PEP 484 numeric tower, so an ``int`` is
accepted wherever a ``float`` is annotated (``sim.run(10)``).
"""

from beartype import BeartypeConf
from beartype import beartype as _beartype

beartype = _beartype(conf=BeartypeConf(is_pep484_tower=True))
