"""Pure engines for concept-graph traversal and collection reconciliation."""
