"""Detection pipeline: signatures, detector, classifier, and scan engine."""
