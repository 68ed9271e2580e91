class DegenerateFitWarning(RuntimeWarning):
    """Warning issued if a variance estimator is undefined for a fit.

    This is the case for the degrees-of-freedom corrected estimator if the
    fitted degrees of freedom reach the number of observations.
    """
