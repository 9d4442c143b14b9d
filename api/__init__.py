"""HTTP adapter for the v-FIT fitting room."""
