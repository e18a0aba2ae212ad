DEFAULT_PASSWORD = 'P@ssw0rd'

ADMIN_EMAIL = 'admin@test.com'
ADMIN_NAME = 'Test Admin'

TEST_USER_EMAIL = 'user@test.com'
TEST_USER_NAME = 'Test User'

ANOTHER_USER_EMAIL = 'another_user@test.com'
ANOTHER_USER_NAME = 'Another User'

DEFAULT_MOVIE = {
    'title': 'Inception',
    'genre': 'Sci-Fi',
    'description': 'A thief who steals corporate secrets through dream-sharing.',
    'poster_image_url': 'https://example.com/posters/inception.jpg',
}

DEFAULT_CAPACITY = 100
