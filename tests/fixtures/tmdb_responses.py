"""
Mock TMDB API responses for testing.

Contains realistic responses from the TMDB search endpoints (movies and TV).
These fixtures are used with respx to mock httpx calls in tests.
"""

# GET /search/movie?query=Inception&language=en-US
TMDB_MOVIE_SEARCH_RESPONSE = {
    "page": 1,
    "results": [
        {
            "adult": False,
            "backdrop_path": "/8ZTVqvKDQ8emSGUEMjsS4yHAwrp.jpg",
            "genre_ids": [28, 878, 12],
            "id": 27205,
            "original_language": "en",
            "original_title": "Inception",
            "overview": "Cobb, a skilled thief who commits corporate espionage...",
            "popularity": 98.41,
            "poster_path": "/oYuLEt3zVCKq57qu2F8dT7NIa6f.jpg",
            "release_date": "2010-07-15",
            "title": "Inception",
            "video": False,
            "vote_average": 8.4,
            "vote_count": 35000,
        },
        {
            "adult": False,
            "backdrop_path": None,
            "genre_ids": [99],
            "id": 613092,
            "original_language": "en",
            "original_title": "Inception: The Cobol Job",
            "overview": "A prequel comic to the film...",
            "popularity": 3.2,
            "poster_path": None,
            "release_date": "2010-12-07",
            "title": "Inception: The Cobol Job",
            "video": False,
            "vote_average": 6.9,
            "vote_count": 210,
        },
    ],
    "total_pages": 1,
    "total_results": 2,
}

# GET /search/tv?query=Breaking Bad&language=en-US
TMDB_TV_SEARCH_RESPONSE = {
    "page": 1,
    "results": [
        {
            "adult": False,
            "backdrop_path": "/tsRy63Mu5cu8etL1X7ZLyf7UP1M.jpg",
            "first_air_date": "2008-01-20",
            "genre_ids": [18, 80],
            "id": 1396,
            "name": "Breaking Bad",
            "origin_country": ["US"],
            "original_language": "en",
            "original_name": "Breaking Bad",
            "overview": "Walter White, a New Mexico chemistry teacher...",
            "popularity": 289.6,
            "poster_path": "/ggFHVNu6YYI5L9pCfOacjizRGt.jpg",
            "vote_average": 8.9,
            "vote_count": 13000,
        },
        {
            "adult": False,
            "backdrop_path": None,
            "first_air_date": "",
            "genre_ids": [99],
            "id": 999001,
            "name": "Breaking Bad: Original Minisodes",
            "origin_country": ["US"],
            "original_language": "en",
            "original_name": "Breaking Bad: Original Minisodes",
            "overview": "",
            "popularity": 1.1,
            "poster_path": None,
            "vote_average": 7.0,
            "vote_count": 12,
        },
    ],
    "total_pages": 1,
    "total_results": 2,
}

# Localized title differing from the original one
# GET /search/tv?query=La Casa de Papel&language=en-US
TMDB_TV_SEARCH_LOCALIZED_RESPONSE = {
    "page": 1,
    "results": [
        {
            "first_air_date": "2017-05-02",
            "id": 71446,
            "name": "Money Heist",
            "original_name": "La casa de papel",
            "origin_country": ["ES"],
            "original_language": "es",
        },
    ],
    "total_pages": 1,
    "total_results": 1,
}

TMDB_SEARCH_EMPTY_RESPONSE = {
    "page": 1,
    "results": [],
    "total_pages": 0,
    "total_results": 0,
}
