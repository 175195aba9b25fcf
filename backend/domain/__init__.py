"""Domain vocabulary shared by models, structs, repositories and policies."""
