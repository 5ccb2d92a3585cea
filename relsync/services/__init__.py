"""Release sync services: manifest reading, patching and commit amending."""
