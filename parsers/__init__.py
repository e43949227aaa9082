"""parsers/ — Chapter document parser package."""
