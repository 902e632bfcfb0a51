# ABOUTME: Canned Met Museum and Europeana API response fixtures for testing.
# ABOUTME: Provides realistic JSON dicts matching each collection API's response shape.

MET_SEARCH_RESPONSE = {
    "total": 3,
    "objectIDs": [436535, 437133, 438817],
}

MET_SEARCH_EMPTY = {
    "total": 0,
    "objectIDs": None,
}

MET_OBJECT_436535 = {
    "objectID": 436535,
    "isPublicDomain": True,
    "primaryImage": "https://images.metmuseum.org/CRDImages/ep/original/DT1567.jpg",
    "primaryImageSmall": "https://images.metmuseum.org/CRDImages/ep/web-large/DT1567.jpg",
    "department": "European Paintings",
    "title": "Wheat Field with Cypresses",
    "artistDisplayName": "Vincent van Gogh",
    "objectDate": "1889",
    "repository": "Metropolitan Museum of Art, New York, NY",
    "GalleryNumber": "822",
}

MET_OBJECT_437133 = {
    "objectID": 437133,
    "primaryImage": "https://images.metmuseum.org/CRDImages/ep/original/DP-1.jpg",
    "primaryImageSmall": "https://images.metmuseum.org/CRDImages/ep/web-large/DP-1.jpg",
    "department": "European Paintings",
    "title": "",
    "artistDisplayName": "",
    "objectDate": "ca. 1890",
    "repository": "",
    "GalleryNumber": "",
}

MET_OBJECT_NO_IMAGE = {
    "objectID": 438817,
    "primaryImage": "",
    "primaryImageSmall": "",
    "title": "Restricted image",
}

EUROPEANA_SEARCH_RESPONSE = {
    "success": True,
    "itemsCount": 2,
    "totalResults": 2,
    "items": [
        {
            "id": "/9200579/abc123",
            "title": ["La Tour Eiffel"],
            "dcCreator": ["Georges Seurat"],
            "year": ["1889"],
            "edmPreview": ["https://api.europeana.eu/thumbnail/v2/url.json?uri=abc"],
            "edmIsShownBy": ["https://example.org/full/abc.jpg"],
            "dataProvider": ["Musée d'Orsay"],
            "provider": ["Europeana Foundation"],
            "country": ["France"],
        },
        {
            "id": "/9200579/def456",
            "dataProvider": ["Rijksmuseum"],
            "edmPreview": ["https://api.europeana.eu/thumbnail/v2/url.json?uri=def"],
            "edmTimespanLabel": ["19th century"],
        },
    ],
}

EUROPEANA_ITEM_NO_PREVIEW = {
    "id": "/9200579/nopreview",
    "title": ["Lost drawing"],
}

EUROPEANA_EMPTY_RESPONSE = {
    "success": True,
    "itemsCount": 0,
    "totalResults": 0,
    "items": [],
}
