"""Core launcher logic: configuration, build, mode selection and exec."""
