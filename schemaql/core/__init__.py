"""Building blocks shared by the schema builder: client definitions, field specs, naming."""
