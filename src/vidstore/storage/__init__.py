"""Document store, identifier allocation and collection repositories."""
