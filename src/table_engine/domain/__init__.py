"""Domain layer: values, tables and the services they use."""
