"""Systems that animate characters and build sprite render commands."""