"""
Exceptions raised by the report pipeline.
"""


class RenderError(Exception):
    """The report content could not be rendered to a surface."""


class ReportGenerationError(Exception):
    """
    Report assembly failed; no document was produced.

    The message is safe to show to the end user. The underlying cause is
    chained as ``__cause__``.
    """

    def __init__(self, message: str = "The comparison report could not be generated."):
        super().__init__(message)
        self.message = message


class InspectionPairError(ValueError):
    """Two inspections cannot be compared as an entry/exit pair."""
