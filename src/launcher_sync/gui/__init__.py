"""Qt models for the editable raw-line grid."""
