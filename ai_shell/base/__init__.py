"""Provider-agnostic building blocks of the completion core."""
