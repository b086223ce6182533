"""Components discovered by the scanner tests; imported only through scanning."""
