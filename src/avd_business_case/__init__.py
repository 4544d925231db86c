"""AVD Business Case - timeline feasibility and TCO/ROI calculator.

Scores migration complexity for an Azure Virtual Desktop project and builds
the multi-year cost and return-on-investment case for moving to it.
"""

__version__ = "1.0.0"

from avd_business_case.config import get_settings

__all__ = ["__version__", "get_settings"]
