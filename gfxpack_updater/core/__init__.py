"""Release lookup, download and extraction building blocks."""
