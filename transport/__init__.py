"""Transport job cost estimation: input model, calculator, exporters and UI."""
