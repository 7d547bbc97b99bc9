class LookupMismatchError(ValueError):
    """Custom error type for sphere lookup consistency checks.

    Raised when an image, a vertex vector and a sphere lookup table
    disagree on their sizes, or when a lookup table references pixels
    or vertices that do not exist.

    Parameters
    ----------
    message : :obj:`str`
        Description of the inconsistency.

    hemi : :obj:`str` or None, default=None
        Hemisphere of the offending lookup, if known.

    """

    def __init__(self, message, hemi=None):
        self.hemi = hemi
        super().__init__(message)

    def __str__(self):
        if self.hemi is None:
            return self.args[0]
        return f"[{self.hemi}] {self.args[0]}"
