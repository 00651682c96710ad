"""Daily construction report exports: PDF, Excel, Word and ZIP."""
