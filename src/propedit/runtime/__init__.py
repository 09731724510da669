"""Runtime services shared by the document layer."""
