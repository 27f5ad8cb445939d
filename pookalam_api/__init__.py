"""HTTP surface over the pookalam geometry core."""
