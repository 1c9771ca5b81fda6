"""MCP protocol surface for Linear Tickets."""
