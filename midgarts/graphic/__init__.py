"""RGBA images and transforms used for sprite rendering."""