"""Character enumerations, job sprite names and sprite paths."""