"""Guardião: drill from protected territories down to deforestation alerts and their field evidence."""
